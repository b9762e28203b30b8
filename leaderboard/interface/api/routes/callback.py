"""Steam OpenID callback page.

Steam redirects the sign-in popup here. The page hands the outcome to the
window that opened it with ``postMessage`` and closes itself. The page is
served by the API, so the message targets the frontend origin, not its own.
"""

import html
import json
import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from leaderboard.adapter.steam.openid import relay_message_from_callback
from leaderboard.config import Settings
from leaderboard.domain.value import RelayMessage, RelayMessageType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"], route_class=DishkaRoute)

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<p>{status}</p>
<script>
(function () {{
  var message = {payload};
  if (window.opener) {{
    window.opener.postMessage(message, {target_origin});
    setTimeout(function () {{ window.close(); }}, {close_delay_ms});
  }} else {{
    setTimeout(function () {{ window.location.href = {target_origin}; }}, {redirect_delay_ms});
  }}
}})();
</script>
</body>
</html>
"""


def render_relay_page(message: RelayMessage, target_origin: str) -> str:
    """Render the page that posts ``message`` to the opener at ``target_origin``.

    Without an opener the page sends the browser to ``target_origin`` instead.

    The payload is embedded as a JS literal; ``<`` is escaped so it cannot
    terminate the script element.
    """
    payload = json.dumps(message.to_wire()).replace("<", "\\u003c")
    success = message.type is RelayMessageType.SUCCESS
    return _PAGE.format(
        title="Authentication Successful" if success else "Authentication Failed",
        status=html.escape(
            "Steam authentication successful!"
            if success
            else message.error or "Steam authentication failed"
        ),
        payload=payload,
        target_origin=json.dumps(target_origin).replace("<", "\\u003c"),
        close_delay_ms=1000 if success else 2000,
        redirect_delay_ms=2000 if success else 3000,
    )


@router.get("/steam-callback", response_class=HTMLResponse)
async def steam_callback(
    request: Request, settings: FromDishka[Settings]
) -> HTMLResponse:
    """Relay the Steam OpenID result to the opener window."""
    message = relay_message_from_callback(dict(request.query_params))
    logger.info(f"Steam callback relayed: type={message.type.value}")
    return HTMLResponse(
        render_relay_page(message, settings.api.frontend_url),
        headers={"Cache-Control": "no-store", "Referrer-Policy": "no-referrer"},
    )
