"""Collaborator wiring — the services handlers use, installed on the domain.

Handlers look their collaborators up with ``get_services()``. Applications
and tests call ``install_services`` at start-up; a domain without installed
services gets the in-memory defaults on first use.
"""

from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from commerce.notifications.fake_email import FakeEmailAdapter
from commerce.notifications.fake_receipt import FakeReceiptRenderer
from commerce.notifications.gateway import NotificationGateway
from commerce.reviews.sanitizer import TextSanitizer, WordListSanitizer

logger = structlog.get_logger(__name__)

_ATTRIBUTE = "services"


@dataclass
class Services:
    notifications: NotificationGateway
    sanitizer: TextSanitizer


def default_services(domain) -> Services:
    return Services(
        notifications=NotificationGateway(
            email=FakeEmailAdapter(),
            receipts=FakeReceiptRenderer(),
            shop_name=getattr(domain, "SHOP_NAME", "Commerce"),
        ),
        sanitizer=WordListSanitizer(getattr(domain, "PROFANITY_WORDS", [])),
    )


def install_services(domain, services: Services) -> Services:
    setattr(domain, _ATTRIBUTE, services)
    return services


def get_services() -> Services:
    services = getattr(current_domain, _ATTRIBUTE, None)
    if services is None:
        logger.debug("installing_default_services", domain=current_domain.name)
        services = install_services(current_domain, default_services(current_domain))
    return services
