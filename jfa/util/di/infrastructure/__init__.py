"""Infrastructure providers."""

# Import bases
from .jellyfin import JellyfinProvider
from .mail import MailProvider
from .ombi import OmbiProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .jellyfin import ProdJellyfinProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .ombi import ProdOmbiProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "JellyfinProvider",
    "MailProvider",
    "OmbiProvider",
    "PersistenceProvider",
    "ProdJellyfinProvider",
    "ProdMailProvider",
    "ProdOmbiProvider",
    "ProdPersistenceProvider",
]
