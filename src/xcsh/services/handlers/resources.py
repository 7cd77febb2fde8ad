"""Generic CRUD commands for generated API domains.

Every non-CLI domain gets ``list``, ``get``, ``create``, ``replace`` and
``delete`` over its resource types. The resource type is the first
positional when it names one of the domain's types, otherwise the
domain's first type.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from xcsh.domain.args import flag_value
from xcsh.domain.errors import ErrorCode, ExitCode
from xcsh.infrastructure.api_client import build_resource_path
from xcsh.services.handlers._render import desc, render
from xcsh.services.registry import CommandDefinition, Handler, SuggestionSource
from xcsh.services.result import DomainCommandResult

if TYPE_CHECKING:
    from xcsh.domain.args import ParsedArgs
    from xcsh.domain.types import DomainInfo, ResourceType
    from xcsh.services.session import Session

logger = logging.getLogger(__name__)

FILE_FLAGS = ("--file", "-f")


class BodyError(Exception):
    """The ``--file`` body could not be read."""


def load_body(path: str) -> dict[str, Any]:
    """Read a YAML or JSON object from *path*.

    Raises:
        BodyError: When the file is missing, unparseable or not a mapping.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise BodyError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    try:
        data = YAML(typ="safe", pure=True).load(text)
    except YAMLError as exc:
        raise BodyError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise BodyError(f"{path} must contain a YAML or JSON object")
    return data


def _resolve_type(info: DomainInfo, args: ParsedArgs) -> ResourceType | None:
    if args.resource_type:
        return info.resource_type(args.resource_type)
    return info.resource_types[0] if info.resource_types else None


def _no_type(info: DomainInfo) -> DomainCommandResult:
    return DomainCommandResult.fail(
        ErrorCode.INVALID_INPUT,
        f"Domain '{info.name}' has no resource types",
        exit_code=ExitCode.VALIDATION_ERROR,
    )


def _missing_name(info: DomainInfo, command: str, rt: ResourceType) -> DomainCommandResult:
    return DomainCommandResult.fail(
        ErrorCode.MISSING_FLAG,
        f"Usage: {info.name} {command} [{rt.name}] <name>",
        exit_code=ExitCode.VALIDATION_ERROR,
        hint="Pass the resource name as a positional argument or with --name.",
    )


def _body_from_args(info: DomainInfo, command: str, args: ParsedArgs) -> dict[str, Any] | DomainCommandResult:
    path = flag_value(args.residual, *FILE_FLAGS)
    if not path:
        return DomainCommandResult.fail(
            ErrorCode.MISSING_FLAG,
            f"Usage: {info.name} {command} --file <path>",
            exit_code=ExitCode.VALIDATION_ERROR,
            hint="Provide the resource body as a YAML or JSON file.",
        )
    try:
        return load_body(path)
    except BodyError as exc:
        return DomainCommandResult.fail(
            ErrorCode.INVALID_INPUT, str(exc), exit_code=ExitCode.VALIDATION_ERROR
        )


def _body_name(body: dict[str, Any]) -> str | None:
    metadata = body.get("metadata")
    if isinstance(metadata, dict) and metadata.get("name"):
        return str(metadata["name"])
    return None


def _list_handler(info: DomainInfo) -> Handler:
    async def handler(args: ParsedArgs, session: Session) -> DomainCommandResult:
        rt = _resolve_type(info, args)
        if rt is None:
            return _no_type(info)
        assert session.api_client is not None
        path = build_resource_path(rt.api_group, rt.plural, args.namespace)
        response = await session.api_client.get(path)
        session.cancellation.raise_if_cancelled()
        return render(response.data, args, session)

    return handler


def _get_handler(info: DomainInfo) -> Handler:
    async def handler(args: ParsedArgs, session: Session) -> DomainCommandResult:
        rt = _resolve_type(info, args)
        if rt is None:
            return _no_type(info)
        if not args.name:
            return _missing_name(info, "get", rt)
        assert session.api_client is not None
        path = build_resource_path(rt.api_group, rt.plural, args.namespace, args.name)
        response = await session.api_client.get(path)
        session.cancellation.raise_if_cancelled()
        return render(response.data, args, session)

    return handler


def _write_handler(info: DomainInfo, command: str, *, replace: bool) -> Handler:
    async def handler(args: ParsedArgs, session: Session) -> DomainCommandResult:
        rt = _resolve_type(info, args)
        if rt is None:
            return _no_type(info)
        body = _body_from_args(info, command, args)
        if isinstance(body, DomainCommandResult):
            return body
        assert session.api_client is not None
        if replace:
            name = args.name or _body_name(body)
            if not name:
                return _missing_name(info, command, rt)
            path = build_resource_path(rt.api_group, rt.plural, args.namespace, name)
            response = await session.api_client.put(path, body)
        else:
            path = build_resource_path(rt.api_group, rt.plural, args.namespace)
            response = await session.api_client.post(path, body)
        logger.info("%s %s %s", command, rt.name, path)
        return render(response.data, args, session)

    return handler


def _delete_handler(info: DomainInfo) -> Handler:
    async def handler(args: ParsedArgs, session: Session) -> DomainCommandResult:
        rt = _resolve_type(info, args)
        if rt is None:
            return _no_type(info)
        if not args.name:
            return _missing_name(info, "delete", rt)
        assert session.api_client is not None
        path = build_resource_path(rt.api_group, rt.plural, args.namespace, args.name)
        await session.api_client.delete(path)
        logger.info("delete %s %s", rt.name, path)
        return DomainCommandResult.success(
            [f"Deleted {rt.name} '{args.name}' from namespace '{args.namespace}'."],
            data={"deleted": args.name, "resource_type": rt.name, "namespace": args.namespace},
        )

    return handler


def crud_commands(info: DomainInfo) -> tuple[CommandDefinition, ...]:
    """CRUD command set for one API domain."""
    types = tuple(rt.name for rt in info.resource_types)
    types_source = SuggestionSource(static=types)
    default = types[0] if types else "<type>"
    label = info.display_name
    return (
        CommandDefinition(
            name="list",
            descriptions=desc(
                f"List {label} resources",
                f"List {label} resources of one type in the target namespace.",
            ),
            execute=_list_handler(info),
            usage="[<resource-type>]",
            aliases=("ls",),
            completion=types_source,
            requires_auth=True,
            examples=(f"{info.name} list {default}", f"{info.name} list -o json"),
        ),
        CommandDefinition(
            name="get",
            descriptions=desc(f"Get one {label} resource"),
            execute=_get_handler(info),
            usage="[<resource-type>] <name>",
            aliases=("show",),
            completion=types_source,
            requires_auth=True,
            examples=(f"{info.name} get {default} my-{default.replace('_', '-')}",),
        ),
        CommandDefinition(
            name="create",
            descriptions=desc(
                f"Create a {label} resource",
                "Create a resource from a YAML or JSON file.",
            ),
            execute=_write_handler(info, "create", replace=False),
            usage="[<resource-type>] --file <path>",
            flags=FILE_FLAGS,
            completion=types_source,
            requires_auth=True,
            examples=(f"{info.name} create {default} -f {default}.yaml",),
        ),
        CommandDefinition(
            name="replace",
            descriptions=desc(
                f"Replace a {label} resource",
                "Replace an existing resource from a YAML or JSON file; the name defaults to metadata.name.",
            ),
            execute=_write_handler(info, "replace", replace=True),
            usage="[<resource-type>] [<name>] --file <path>",
            aliases=("apply", "update"),
            flags=FILE_FLAGS,
            completion=types_source,
            requires_auth=True,
            examples=(f"{info.name} replace {default} -f {default}.yaml",),
        ),
        CommandDefinition(
            name="delete",
            descriptions=desc(f"Delete a {label} resource"),
            execute=_delete_handler(info),
            usage="[<resource-type>] <name>",
            aliases=("rm",),
            completion=types_source,
            requires_auth=True,
            examples=(f"{info.name} delete {default} my-{default.replace('_', '-')}",),
        ),
    )
