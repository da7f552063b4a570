"""Profile state and body-weight tracking."""

from datetime import datetime
from typing import Optional

from fitgenius.schemas.user import UserProfile, WeightEntry
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.metrics import WeightTrend, weight_trend
from fitgenius.utils.helpers import to_number
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class ProfileBook:
    """Holds the profile; falls back to defaults when the backend has none yet."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.profile = UserProfile()

    async def load(self) -> UserProfile:
        stored = await self.backend.get_profile()
        if stored is not None:
            self.profile = stored
        else:
            logger.info("No stored profile, using defaults")
        return self.profile

    async def save(self, profile: UserProfile) -> UserProfile:
        await self.backend.save_profile(profile)
        self.profile = profile
        return profile

    async def record_weight(self, weight, when: Optional[datetime] = None) -> UserProfile:
        """Append a weight sample and make it the current weight."""
        kg = to_number(weight)
        if kg <= 0:
            raise ValueError("Weight must be a positive number")
        await self.backend.record_weight(kg)
        history = [*self.profile.weight_history, WeightEntry(date=when or datetime.now(), weight=kg)]
        self.profile = self.profile.model_copy(update={"weight": kg, "weight_history": history})
        return self.profile

    def trend(self) -> WeightTrend:
        return weight_trend(self.profile.weight_history, self.profile.weight)
