"""Record service — business logic for users, angles and goals.

Learn: Service layer separates business logic from HTTP routing.
API routes call the service, the service calls the stores. Every
operation after signup/login takes the Identity the gate resolved
and only ever reads or writes that user's data.
"""

from typing import Any, BinaryIO, Optional

import anyio.to_thread
import structlog

from angletrack.auth.identity import Identity
from angletrack.auth.jwt import TokenIssuer
from angletrack.auth.password import hash_password, verify_password
from angletrack.config import Settings
from angletrack.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from angletrack.schemas.user import Number, UserRecord, normalize_email
from angletrack.services.upload_service import UploadService
from angletrack.storage.measurements import MeasurementStore
from angletrack.storage.users import UserStore, is_number

logger = structlog.get_logger()


class RecordService:
    """Per-identity CRUD over the credential and measurement stores."""

    def __init__(
        self,
        settings: Settings,
        users: UserStore,
        measurements: MeasurementStore,
        tokens: TokenIssuer,
        uploads: UploadService,
    ):
        self.users = users
        self.measurements = measurements
        self.tokens = tokens
        self.uploads = uploads
        self.default_goal = settings.default_goal
        self.bcrypt_rounds = settings.bcrypt_rounds
        # Compared against on unknown-email logins so both failure paths
        # pay for one bcrypt check.
        self._dummy_hash = hash_password("angletrack-dummy", rounds=self.bcrypt_rounds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecordService":
        return cls(
            settings=settings,
            users=UserStore(settings.users_path),
            measurements=MeasurementStore(settings.angles_path),
            tokens=TokenIssuer(settings),
            uploads=UploadService(settings),
        )

    # ─── Signup / Login ─────────────────────────────────

    async def signup(self, name: str, email: str, password: str) -> UserRecord:
        """Register a user. No token is returned; login is a separate step."""
        for field, value in (("name", name), ("email", email), ("password", password)):
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{field} is required")
        email = normalize_email(email)

        # Fast path before paying for bcrypt; create() re-checks under lock.
        if await self.users.find_by_email(email):
            raise Conflict("Email already registered")

        record = UserRecord(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )
        return await self.users.create(record)

    async def login(self, email: str, password: str) -> str:
        """Email/password → JWT. Unknown email and wrong password look the same."""
        user = None
        if isinstance(email, str) and email.strip():
            user = await self.users.find_by_email(normalize_email(email))

        if user is None:
            verify_password(password or "", self._dummy_hash)
            logger.info("angletrack.login_failed")
            raise InvalidCredentials("Invalid credentials")

        if not verify_password(password, user.password_hash):
            logger.info("angletrack.login_failed")
            raise InvalidCredentials("Invalid credentials")

        logger.info("angletrack.login", email=user.email)
        return self.tokens.issue(user.email)

    async def get_profile(self, identity: Identity) -> dict[str, Any]:
        user = await self._require_user(identity)
        return {
            "name": user.name,
            "email": user.email,
            "goal": self._goal_or_default(user),
        }

    # ─── Uploads ────────────────────────────────────────

    async def upload_reference(
        self, identity: Identity, filename: Optional[str], fileobj: BinaryIO
    ) -> str:
        """Store a progress photo and return its public path."""
        path = await anyio.to_thread.run_sync(self.uploads.save, filename, fileobj)
        logger.info("angletrack.image_uploaded", email=identity.email, path=path)
        return path

    # ─── Angles ─────────────────────────────────────────

    async def list_angles(self, identity: Identity) -> list[dict]:
        return await self.measurements.list_by_owner(identity.email)

    async def submit_angle(self, identity: Identity, payload: Any) -> dict:
        if not isinstance(payload, dict):
            raise ValidationError("Angle data must be a JSON object")
        return await self.measurements.append(payload, owner_email=identity.email)

    # ─── Goal ───────────────────────────────────────────

    async def get_goal(self, identity: Identity) -> Number:
        user = await self._require_user(identity)
        return self._goal_or_default(user)

    async def set_goal(self, identity: Identity, goal: Any) -> Number:
        if not is_number(goal):
            raise ValidationError("Goal must be a number")
        user = await self.users.update_goal(identity.email, goal)
        return user.goal

    # ─── Helpers ────────────────────────────────────────

    async def _require_user(self, identity: Identity) -> UserRecord:
        user = await self.users.find_by_email(identity.email)
        if user is None:
            raise NotFound("User not found")
        return user

    def _goal_or_default(self, user: UserRecord) -> Number:
        return self.default_goal if user.goal is None else user.goal
