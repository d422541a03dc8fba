from typing import Mapping, Protocol


class MessageCatalog(Protocol):
    """Port for localized validation messages.

    messages() resolves the catalog for a locale with the usual fallback
    (language and country, then language, then the default catalog).
    """

    def messages(self, locale: str | None) -> Mapping[str, str]: ...
