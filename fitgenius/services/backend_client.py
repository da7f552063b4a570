"""HTTP client for the FitGenius data backend."""

from typing import Any, List, Optional

import httpx

from fitgenius.config.settings import settings
from fitgenius.schemas.plan import WorkoutPlan
from fitgenius.schemas.user import UserProfile
from fitgenius.schemas.workout_log import WorkoutLog
from fitgenius.services.errors import BackendError, Unauthorized
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class BackendClient:
    """Bearer-token client for profile, logs, weight and plan endpoints.

    A 401 or 403 from any endpoint clears the held token and raises
    ``Unauthorized``; the caller has to log in again.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        token: Optional[str] = None,
    ):
        self.base_url = base_url or settings.backend_url
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.backend_timeout,
            transport=transport,
        )

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        allow_404: bool = False,
        auth: bool = True,
    ) -> Optional[httpx.Response]:
        headers = {}
        if auth:
            if not self.token:
                raise Unauthorized("Not logged in")
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Backend request {method} {path} failed: {e}")
            raise BackendError(f"Backend unreachable: {e}") from e

        if response.status_code in (401, 403):
            if auth:
                logger.info(f"Backend rejected token ({response.status_code}), clearing session")
                self.token = None
            raise Unauthorized(self._detail(response), response.status_code)
        if response.status_code == 404 and allow_404:
            return None
        if response.is_error:
            logger.error(f"Backend {method} {path} returned {response.status_code}: {response.text}")
            raise BackendError(self._detail(response), response.status_code)
        return response

    @staticmethod
    def _detail(response: httpx.Response) -> str:
        try:
            return str(response.json().get("detail", response.text))
        except (ValueError, AttributeError):
            return response.text or f"HTTP {response.status_code}"

    # -- auth -----------------------------------------------------------

    async def _authenticate(self, path: str, username: str, password: str) -> str:
        response = await self._request(
            "POST", path, json={"username": username, "password": password}, auth=False
        )
        self.token = response.json()["token"]
        logger.info(f"Authenticated as {username}")
        return self.token

    async def login(self, username: str, password: str) -> str:
        return await self._authenticate("/auth/login", username, password)

    async def register(self, username: str, password: str) -> str:
        return await self._authenticate("/auth/register", username, password)

    def logout(self) -> None:
        self.token = None

    # -- profile --------------------------------------------------------

    async def get_profile(self) -> Optional[UserProfile]:
        response = await self._request("GET", "/profile", allow_404=True)
        return UserProfile.model_validate(response.json()) if response is not None else None

    async def save_profile(self, profile: UserProfile) -> None:
        await self._request("POST", "/profile", json=profile.model_dump(mode="json"))

    async def record_weight(self, weight: float) -> None:
        await self._request("POST", "/weight", json={"weight": weight})

    # -- logs -----------------------------------------------------------

    async def get_logs(self) -> List[WorkoutLog]:
        response = await self._request("GET", "/logs")
        return [WorkoutLog.model_validate(item) for item in response.json()]

    async def add_log(self, log: WorkoutLog) -> None:
        await self._request("POST", "/logs", json=log.model_dump(mode="json"))

    # -- plan -----------------------------------------------------------

    async def get_plan(self) -> Optional[WorkoutPlan]:
        response = await self._request("GET", "/plan", allow_404=True)
        return WorkoutPlan.model_validate(response.json()) if response is not None else None

    async def save_plan(self, plan: WorkoutPlan) -> None:
        await self._request("POST", "/plan", json=plan.model_dump(mode="json"))

    async def aclose(self) -> None:
        await self._client.aclose()
