
from src.buildor.services.app_config_service import AppConfigService
from src.buildor.services.auth_service import AuthService
from src.buildor.services.client_service import ClientService
from src.buildor.services.invite_service import InviteService
from src.buildor.services.message_service import MessageService
from src.buildor.services.paypal_service import PayPalService
from src.buildor.services.portal_service import PortalService

__all__ = [
    "AppConfigService",
    "AuthService",
    "ClientService",
    "InviteService",
    "MessageService",
    "PayPalService",
    "PortalService",
]
