"""Built-in command handlers and the default registry."""

from __future__ import annotations

from collections.abc import Mapping

from xcsh.domain.catalog import DomainCatalog
from xcsh.generated.domains import DEPRECATED_DOMAINS
from xcsh.services.handlers import ai_services, cloudstatus, context, login, subscription
from xcsh.services.handlers.resources import crud_commands
from xcsh.services.registry import CommandRegistry, RegistryBuilder

BUILTIN_DOMAINS = {
    "context": context.COMMANDS,
    "login": login.COMMANDS,
    "subscription": subscription.COMMANDS,
    "ai_services": ai_services.COMMANDS,
    "cloudstatus": cloudstatus.COMMANDS,
}


def build_default_registry(
    catalog: DomainCatalog,
    extra_deprecations: Mapping[str, str] | None = None,
) -> CommandRegistry:
    """Registry with the CLI domains plus CRUD for every API domain.

    Raises:
        ValueError: When a registration conflicts with *catalog*.
    """
    builder = RegistryBuilder()
    for domain, commands in BUILTIN_DOMAINS.items():
        if domain in catalog:
            builder.register_many(domain, commands)
    for info in catalog:
        if not info.cli_only:
            builder.register_many(info.name, crud_commands(info))
    for old, new in {**DEPRECATED_DOMAINS, **(extra_deprecations or {})}.items():
        builder.deprecate(old, new)
    return builder.build(catalog)
