"""JSON-file implementation of the invite store."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from jfa.config import StorageSettings
from jfa.domain.model import Invite
from jfa.domain.repository import InviteRepository
from jfa.domain.value import InviteCode
from jfa.persistence.error import PersistenceError
from jfa.persistence.jsonfile import JsonFile
from jfa.persistence.mappers import dict_to_invite, invite_to_dict


class JsonInviteRepository(InviteRepository):
    """Invite store backed by ``invites.json``."""

    def __init__(self, settings: StorageSettings) -> None:
        """Initialize repository.

        Args:
            settings: Storage settings (file location and read cache)
        """
        super().__init__()
        self.file = JsonFile(settings.invites_path, settings.cache_seconds)
        self._invites: dict[str, Invite] = {}

    async def load(self) -> None:
        """Refresh the view from ``invites.json``.

        Raises:
            PersistenceError: If the file or one of its records is invalid
        """
        if self.file.fresh:
            return
        data = await self.file.read(default={})
        invites: dict[str, Invite] = {}
        for code, record in data.items():
            try:
                invites[code] = dict_to_invite(code, record)
            except (KeyError, TypeError, ValueError, PydanticValidationError) as e:
                logfire.error("Invalid invite record {code}", code=code)
                raise PersistenceError(f"Invalid invite record {code}: {e}") from e
        self._invites = invites

    async def persist(self) -> None:
        """Write the view to ``invites.json``.

        Raises:
            PersistenceError: If the write failed; the view is reloaded
                from the unchanged file before the error propagates
        """
        data = {code: invite_to_dict(invite) for code, invite in self._invites.items()}
        try:
            await self.file.write(data)
        except PersistenceError:
            await self.load()
            raise

    def get(self, code: InviteCode) -> Invite | None:
        return self._invites.get(str(code))

    def put(self, invite: Invite) -> None:
        self._invites[str(invite.code)] = invite

    def delete(self, code: InviteCode) -> bool:
        return self._invites.pop(str(code), None) is not None

    def all(self) -> list[Invite]:
        return list(self._invites.values())
