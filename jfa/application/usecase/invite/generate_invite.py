"""Generate invite use case."""

from pydantic import BaseModel, ConfigDict, Field

from jfa.application.usecase.base import BaseUseCase
from jfa.domain.service import GenerateInviteOptions, InviteService


class GenerateInviteRequest(BaseModel):
    """Generate invite request."""

    model_config = ConfigDict(populate_by_name=True)

    days: int = Field(default=0, ge=0)
    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)
    email: str = ""
    multiple_uses: bool = Field(default=False, alias="multiple-uses")
    no_limit: bool = Field(default=False, alias="no-limit")
    remaining_uses: int = Field(default=1, ge=0, alias="remaining-uses")
    profile: str = ""


class GenerateInviteResponse(BaseModel):
    """Generate invite response."""

    success: bool = True
    code: str
    email: str | None = None


class GenerateInviteUseCase(BaseUseCase):
    """Use case for creating an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: GenerateInviteRequest) -> GenerateInviteResponse:
        """Sweep expired invites, then create the new one.

        Raises:
            NoDefaultProfileError: If the profile fallback does not exist
            PersistenceError: If the invite could not be stored
        """
        await self.invite_service.sweep_expired()
        invite = await self.invite_service.generate(
            GenerateInviteOptions(
                days=request.days,
                hours=request.hours,
                minutes=request.minutes,
                multiple_uses=request.multiple_uses,
                no_limit=request.no_limit,
                remaining_uses=request.remaining_uses,
                profile=request.profile,
                email=request.email,
            )
        )
        return GenerateInviteResponse(code=str(invite.code), email=invite.email or None)
