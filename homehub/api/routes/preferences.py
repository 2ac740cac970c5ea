"""Hub module layout preferences."""

from fastapi import APIRouter, Depends

from homehub.api.dependencies import get_prefs_store
from homehub.application.dto.requests import UpdatePreferencesRequest
from homehub.application.dto.responses import PreferencesResponse
from homehub.core.entities.preferences import UserPreferences
from homehub.core.interfaces import IPreferencesStore

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


def _entity_to_response(preferences: UserPreferences) -> PreferencesResponse:
    return PreferencesResponse(
        module_order=preferences.module_order,
        enabled_modules=preferences.enabled_modules,
        visible_modules=preferences.visible_modules,
        updated_at=preferences.updated_at,
    )


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    store: IPreferencesStore = Depends(get_prefs_store),
) -> PreferencesResponse:
    """Current module order and visibility (defaults when never saved)."""
    return _entity_to_response(await store.get())


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    request: UpdatePreferencesRequest,
    store: IPreferencesStore = Depends(get_prefs_store),
) -> PreferencesResponse:
    """Change module order and/or visibility. Unknown modules are ignored."""
    current = await store.get()
    updated = UserPreferences(
        user_key=current.user_key,
        module_order=(
            request.module_order if request.module_order is not None else current.module_order
        ),
        enabled_modules=(
            request.enabled_modules
            if request.enabled_modules is not None
            else current.enabled_modules
        ),
    )
    return _entity_to_response(await store.save(updated))
