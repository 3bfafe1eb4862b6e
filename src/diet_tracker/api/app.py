"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diet_tracker.api.request_models import (
    MealAnalyzeRequest,
    MealCreateRequest,
    SetupRequest,
)
from diet_tracker.app_logging import configure_logging
from diet_tracker.config import parse_allowed_origins
from diet_tracker.containers import AppContainer
from diet_tracker.domain.meals import DailyTotals, GoalProgress, Meal, NutrientProgress
from diet_tracker.domain.models import UserRecord
from diet_tracker.domain.profiles import Goals, ProfileRecord
from diet_tracker.services.auth import parse_bearer_token
from diet_tracker.services.goals import cm_to_feet_inches, round_half_up


def _get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(_get_container),
) -> UserRecord:
    """Resolve the bearer token to a user or reject the request."""
    user = container.auth_service.authenticate(parse_bearer_token(authorization))
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return user


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Return the user's profile and goals."""
        record = state_container.profile_service.get_profile(user.id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _format_profile(record)

    @app.post("/profile/setup")
    async def complete_setup(
        setup: SetupRequest,
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Compute and persist goals from the setup form."""
        goals = state_container.profile_service.complete_setup(
            user.id, setup.to_profile()
        )
        return {"goals": _format_goals(goals)}

    @app.get("/goals")
    async def get_goals(
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Return the goals currently in effect."""
        goals = state_container.diary_service.get_goals(user.id)
        return {
            "goals": _format_goals(goals),
            "setup_completed": state_container.profile_service.is_setup_completed(
                user.id
            ),
        }

    @app.get("/meals")
    async def list_meals(
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Return today's meals."""
        meals = state_container.diary_service.list_meals(user.id)
        return {"meals": [_format_meal(meal) for meal in meals]}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(
        payload: MealCreateRequest,
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Log a manually entered meal."""
        meal = state_container.diary_service.add_meal(user.id, payload.to_draft())
        return {"meal": _format_meal(meal)}

    @app.post(
        "/meals/analyze", status_code=status.HTTP_201_CREATED, response_model=None
    )
    async def analyze_meal(
        payload: MealAnalyzeRequest,
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object] | JSONResponse:
        """Analyze a meal photo and log the estimated meal."""
        try:
            meal = await state_container.diary_service.add_analyzed_meal(
                user.id, payload.image, image_url=payload.image_url
            )
        except Exception as exc:
            logger.exception("Meal analysis failed", extra={"user_id": str(user.id)})
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content=_format_analysis_error(state_container, exc),
            )
        return {"meal": _format_meal(meal)}

    @app.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_meal(
        meal_id: str,
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> None:
        """Remove a meal from today's log."""
        if not state_container.diary_service.delete_meal(user.id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/progress")
    async def get_progress(
        user: UserRecord = Depends(require_user),
        state_container: AppContainer = Depends(_get_container),
    ) -> dict[str, object]:
        """Return today's totals compared against goals."""
        totals, progress = state_container.diary_service.get_progress(user.id)
        meals = state_container.diary_service.list_meals(user.id)
        return {
            "totals": _format_totals(totals),
            "progress": _format_progress(progress),
            "meal_count": len(meals),
        }

    return app


def _format_analysis_error(
    state_container: AppContainer, exc: Exception
) -> dict[str, object]:
    """Return the error payload, with exception details only when local."""
    content: dict[str, object] = {
        "error": "Failed to analyze meal",
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }
    if state_container.settings.environment == "local":
        content["details"] = f"{type(exc).__name__}: {exc}".strip()
    return content


def _format_goals(goals: Goals) -> dict[str, object]:
    return {
        "bmr": goals.bmr,
        "daily_calories": goals.daily_calories,
        "protein": goals.protein_g,
        "carbs": goals.carbs_g,
        "fats": goals.fats_g,
    }


def _format_profile(record: ProfileRecord) -> dict[str, object]:
    profile = record.profile
    feet, inches = cm_to_feet_inches(profile.height_cm)
    return {
        "age": profile.age,
        "weight": profile.weight_kg,
        "height": profile.height_cm,
        "height_feet": feet,
        "height_inches": inches,
        "gender": profile.sex.value,
        "activity_level": profile.activity_level.value,
        "goal": profile.objective.value,
        "setup_completed": record.setup_completed,
        "goals": _format_goals(record.goals),
    }


def _format_meal(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "name": meal.name,
        "calories": meal.calories,
        "protein": meal.protein_g,
        "carbs": meal.carbs_g,
        "fats": meal.fats_g,
        "image_url": meal.image_url,
        "created_at": meal.created_at.isoformat(),
    }


def _format_totals(totals: DailyTotals) -> dict[str, float]:
    return {
        "calories": totals.calories,
        "protein": totals.protein_g,
        "carbs": totals.carbs_g,
        "fats": totals.fats_g,
    }


def _format_progress(progress: GoalProgress) -> dict[str, dict[str, float]]:
    return {
        "calories": _format_nutrient(progress.calories),
        "protein": _format_nutrient(progress.protein),
        "carbs": _format_nutrient(progress.carbs),
        "fats": _format_nutrient(progress.fats),
    }


def _format_nutrient(nutrient: NutrientProgress) -> dict[str, float]:
    return {
        "consumed": nutrient.consumed,
        "goal": nutrient.goal,
        "remaining": nutrient.remaining,
        "percent": round_half_up(nutrient.percent * 10) / 10,
    }
