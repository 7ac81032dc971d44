"""Messaging API Routes

Direct WhatsApp send with caller-supplied provider credentials, used by
the settings screen to test a configuration.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from config import ApplicationConfig
from src.api.dependencies import require_tenant_member
from src.api.error import ClientError
from src.api.schemas.messaging_request import SendMessageRequestSchema
from src.adapter.services.messaging import create_messaging_provider
from src.app.services.messaging_gateway import OutboundMessage
from src.app.use_cases.messaging import SendMessage
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/whatsapp", tags=["Messaging"])

PASSTHROUGH_STATUSES = (
    status.HTTP_400_BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN,
)


def _build_provider(provider, config):
    return create_messaging_provider(
        provider, config, timeout=ApplicationConfig.MESSAGING_TIMEOUT_SECONDS
    )


@router.post(
    "/send",
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Malformed request or incomplete provider configuration",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PROVIDER_CONFIGURATION",
                            "message": "Twilio configuration is incomplete (missing: auth_token)"
                        }
                    }
                }
            }
        },
        401: {"description": "Not a tenant member, or provider rejected the credentials"},
        500: {
            "description": "Provider unreachable or unexpected failure",
            "content": {"application/json": {"example": {"success": False, "error": "timeout"}}},
        },
    }
)
async def send_message(
    request: SendMessageRequestSchema,
    context: TenantContext = Depends(require_tenant_member),
):
    """
    Send one WhatsApp message through the chosen provider.

    **Request body:**
    - `provider` (required): messageautosender, twilio, cloud-api or custom
    - `config` (required): credentials for that provider
    - `to` (required): destination number, normalized to the 91 country code
    - `message` (required): text
    - `attachment` (optional): `{filename, content_base64, mime_type}`

    **Returns:**
    - 200: `{"success": true}`
    - 400: Malformed input, configuration error, or provider reported failure
    - 401/403: Provider rejected the credentials
    - 500: Timeout, network error or unexpected provider status
    """
    message = OutboundMessage(
        to=request.to,
        text=request.message,
        attachment=request.attachment.to_attachment() if request.attachment else None,
    )

    use_case = SendMessage(_build_provider)
    result = await use_case.execute(context, request.provider, request.config, message)

    if result.is_err():
        raise ClientError.from_error(result.error)

    send_result = result.value
    if send_result.success:
        return send_result.to_dict()

    status_code = (
        send_result.status_code
        if send_result.status_code in PASSTHROUGH_STATUSES
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(status_code=status_code, content=send_result.to_dict())
