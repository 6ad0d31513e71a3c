"""
Challenge widget markup for the comment form.

Only the public site key is read here. It is HTML-escaped before being
embedded, since it comes from an admin-writable store.
"""

from __future__ import annotations

from urllib.parse import urlencode

from markupsafe import Markup

from infrastructure.credentials.protocol import CredentialStore
from schemas.models.verification import CredentialKey
from shared.logging import get_logger

log = get_logger(__name__)

_WIDGET_TEMPLATE = Markup(
    '<div class="comment-form-recaptcha" style="margin: 12px 0; min-height: 78px;">'
    '<div class="g-recaptcha" data-sitekey="{site_key}"></div>'
    "</div>\n"
    '<script src="{script_src}" async defer></script>'
)


class WidgetService:
    def __init__(
        self, store: CredentialStore, script_url: str, language: str = "en"
    ) -> None:
        self._store = store
        self._script_url = script_url
        self._language = language

    @property
    def script_src(self) -> str:
        return f"{self._script_url}?{urlencode({'hl': self._language})}"

    async def render(self) -> str:
        """Return the widget HTML, or ``""`` when no site key is configured."""
        site_key = await self._store.get(CredentialKey.SITE_KEY)
        if not site_key:
            log.warning("recaptcha_site_key_not_configured")
            return ""
        # Markup.format() escapes its arguments
        return str(
            _WIDGET_TEMPLATE.format(site_key=site_key, script_src=self.script_src)
        )
