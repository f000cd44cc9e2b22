"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Query, Request, status

from calorie_tracker.api.backup import router as backup_router
from calorie_tracker.api.schemas import (
    ActivityRequest,
    CustomEntryRequest,
    EntryRequest,
    FavoriteRequest,
    ProfileRequest,
    WeightRequest,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.profile import ActivityLevel, ProfileDraft
from calorie_tracker.services import aggregation, energy
from calorie_tracker.services.search import RESULT_LIMIT
from calorie_tracker.services.store import ProfileValidationError

MIN_BALANCE_DAYS = 2


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(backup_router)

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the saved profile with derived energy figures."""
        store = _container(request).store
        return {
            "profile": store.profile,
            "confirmed": store.profile_confirmed,
            "activity_level": store.activity_level,
            "energy": energy.energy_summary(store.profile, store.activity_level),
        }

    @app.get("/profile/draft")
    async def get_profile_draft(request: Request) -> dict[str, object]:
        """Return the profile form pre-filled from the saved profile."""
        return {"draft": _container(request).store.edit_profile()}

    @app.put("/profile")
    async def save_profile(
        payload: ProfileRequest, request: Request
    ) -> dict[str, object]:
        """Validate and save the profile."""
        store = _container(request).store
        draft = ProfileDraft(
            name=payload.name,
            weight_kg=payload.weight_kg,
            height_cm=payload.height_cm,
            age_years=payload.age_years,
            sex=payload.sex,
        )
        try:
            profile = store.save_profile(draft)
        except ProfileValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {
            "profile": profile,
            "energy": energy.energy_summary(profile, store.activity_level),
        }

    @app.get("/activity-levels")
    async def list_activity_levels() -> dict[str, object]:
        """Return the selectable activity levels."""
        return {
            "levels": [
                {
                    "id": level.value,
                    "label": level.label,
                    "description": level.description,
                    "factor": level.factor,
                }
                for level in ActivityLevel
            ]
        }

    @app.put("/activity")
    async def set_activity(
        payload: ActivityRequest, request: Request
    ) -> dict[str, object]:
        """Select the activity level used for TDEE."""
        store = _container(request).store
        level = store.set_activity_level(payload.level)
        return {
            "activity_level": level.value,
            "energy": energy.energy_summary(store.profile, store.activity_level),
        }

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: str = "",
        limit: int = Query(RESULT_LIMIT, ge=1, le=RESULT_LIMIT),
    ) -> dict[str, object]:
        """Rank catalog foods for a query."""
        container = _container(request)
        foods = container.search_service.search(q, limit=limit)
        return {
            "foods": [
                {
                    "name": food.name,
                    "calories_per_100g": food.calories_per_100g,
                    "favorite": container.store.is_favorite(food.name),
                }
                for food in foods
            ]
        }

    @app.get("/entries")
    async def list_entries(
        request: Request, date: str | None = None
    ) -> dict[str, object]:
        """Return the entries logged on a date, today by default."""
        store = _container(request).store
        day = date or store.today()
        return {"date": day, "entries": aggregation.today_entries(store.entries, day)}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def add_entry(payload: EntryRequest, request: Request) -> dict[str, object]:
        """Log a portion of a catalog or recently used food."""
        container = _container(request)
        food = _resolve_food(container, payload.food_name)
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Unknown food"
            )
        entry = container.store.add_entry(food, payload.amount_grams, payload.meal_slot)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Enter a positive amount",
            )
        return {"entry": entry}

    @app.post("/entries/custom", status_code=status.HTTP_201_CREATED)
    async def add_custom_entry(
        payload: CustomEntryRequest, request: Request
    ) -> dict[str, object]:
        """Log a portion of a food that is not in the catalog."""
        entry = _container(request).store.add_custom_entry(
            payload.name,
            payload.calories_per_100g,
            payload.amount_grams,
            payload.meal_slot,
        )
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Enter a name, calories and a positive amount",
            )
        return {"entry": entry}

    @app.delete("/entries/{entry_id}")
    async def remove_entry(entry_id: int, request: Request) -> dict[str, str]:
        """Delete a logged entry."""
        if not _container(request).store.remove_entry(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.get("/favorites")
    async def list_favorites(request: Request) -> dict[str, object]:
        """Return favorite catalog foods."""
        container = _container(request)
        return {
            "foods": container.search_service.favorites(container.store.favorites)
        }

    @app.post("/favorites/toggle")
    async def toggle_favorite(
        payload: FavoriteRequest, request: Request
    ) -> dict[str, object]:
        """Add or remove a food from favorites."""
        favorite = _container(request).store.toggle_favorite(payload.food_name)
        return {"food_name": payload.food_name, "favorite": favorite}

    @app.get("/recents")
    async def list_recents(request: Request) -> dict[str, object]:
        """Return recently used foods, most recent first."""
        return {"foods": _container(request).store.recent_foods}

    @app.get("/weights")
    async def list_weights(request: Request) -> dict[str, object]:
        """Return all weigh-ins."""
        return {"weights": _container(request).store.weight_logs}

    @app.post("/weights", status_code=status.HTTP_201_CREATED)
    async def log_weight(payload: WeightRequest, request: Request) -> dict[str, object]:
        """Record a weigh-in, replacing any earlier one on the same date."""
        log = _container(request).store.log_weight(payload.weight_kg, payload.date)
        if log is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Enter a valid weight (1-500 kg)",
            )
        return {"weight": log}

    @app.delete("/weights/{created_at}")
    async def remove_weight(created_at: int, request: Request) -> dict[str, str]:
        """Delete a weigh-in."""
        if not _container(request).store.remove_weight_log(created_at):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.get("/weights/trend")
    async def weight_trend(request: Request) -> dict[str, object]:
        """Return the weight series correlated with daily intake."""
        store = _container(request).store
        totals = aggregation.daily_calorie_totals(store.entries)
        return {"trend": aggregation.weight_trend(store.weight_logs, totals)}

    @app.get("/summary/today")
    async def today_summary(request: Request) -> dict[str, object]:
        """Return today's intake, meal breakdown and progress against TDEE."""
        container = _container(request)
        store = container.store
        entries = aggregation.today_entries(store.entries, store.today())
        consumed = aggregation.total_calories(entries)
        summary = energy.energy_summary(store.profile, store.activity_level)
        breakdown = aggregation.meal_breakdown(entries)
        return {
            "date": store.today(),
            "total_calories": consumed,
            "meals": {slot.value: totals for slot, totals in breakdown.items()},
            "progress": energy.calorie_progress(
                consumed, summary.tdee if summary else None
            ),
            "suggested_meal_slot": aggregation.suggested_meal_slot(
                container.clock().hour
            ),
        }

    @app.get("/summary/week")
    async def week_summary(request: Request) -> dict[str, object]:
        """Return rolling seven-day statistics."""
        container = _container(request)
        store = container.store
        stats = aggregation.weekly_stats(store.entries, container.clock().date())
        summary = energy.energy_summary(store.profile, store.activity_level)
        balance = None
        if summary and stats.days_with_data >= MIN_BALANCE_DAYS:
            balance = energy.weekly_balance(stats.average, summary.tdee)
        return {"week": stats, "balance": balance}

    @app.get("/history")
    async def history(request: Request) -> dict[str, object]:
        """Return all entries grouped by day, newest first."""
        return {"days": aggregation.group_by_day(_container(request).store.entries)}

    logger.info(
        "App created: foods=%s", len(container.search_service.catalog)
    )
    return app


def _resolve_food(container: AppContainer, name: str) -> Food | None:
    food = container.search_service.find(name)
    if food is not None:
        return food
    for recent in container.store.recent_foods:
        if recent.name == name:
            return recent
    return None
