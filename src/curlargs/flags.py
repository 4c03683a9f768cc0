"""The curl option registry and its click integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import click
from click.core import ParameterSource

from .options import OptionKind, OptionSource
from .parsing import parse_form_field


@dataclass(frozen=True)
class OptionSpec:
    """A recognized curl option."""

    name: str
    kind: OptionKind
    short: str | None = None
    help: str = ""

    @property
    def param_name(self) -> str:
        return self.name.replace("-", "_")


OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("request", OptionKind.STRING, "-X", "Specify request method to use"),
    OptionSpec("url", OptionKind.STRING, None, "URL to work with"),
    OptionSpec("get", OptionKind.BOOL, "-G", "Put the post data in the URL and use GET"),
    OptionSpec("head", OptionKind.BOOL, "-I", "Show document info only"),
    OptionSpec("data", OptionKind.STRING, "-d", "HTTP POST data"),
    OptionSpec("data-binary", OptionKind.STRING, None, "HTTP POST binary data"),
    OptionSpec("data-raw", OptionKind.STRING, None, "HTTP POST data, '@' allowed"),
    OptionSpec("data-urlencode", OptionKind.STRING, None, "HTTP POST data URL encoded"),
    OptionSpec("form", OptionKind.STRING_MAP, "-F", "Form field as key=value (repeatable)"),
    OptionSpec("json", OptionKind.STRING, None, "HTTP POST JSON"),
    OptionSpec("compressed", OptionKind.BOOL, None, "Request compressed response"),
    OptionSpec("range", OptionKind.STRING, "-r", "Retrieve only the bytes within RANGE"),
    OptionSpec("user-agent", OptionKind.STRING, "-A", "Send User-Agent <name> to server"),
    OptionSpec("user", OptionKind.STRING, "-u", "Server user and password"),
    OptionSpec("oauth2-bearer", OptionKind.STRING, None, "OAuth 2 Bearer Token"),
    OptionSpec("referer", OptionKind.STRING, "-e", "Send Referer Page information"),
    OptionSpec("header", OptionKind.STRING_LIST, "-H", "Pass custom header(s) to server"),
    OptionSpec("cookie", OptionKind.STRING_LIST, "-b", "Send cookies from string"),
    OptionSpec("insecure", OptionKind.BOOL, "-k", "Allow insecure server connections"),
    OptionSpec("connect-timeout", OptionKind.FLOAT, None, "Maximum time allowed to connect"),
    OptionSpec(
        "proxy", OptionKind.STRING, "-x", "Use this proxy (scheme required, e.g. http://host:port)"
    ),
    OptionSpec("max-time", OptionKind.FLOAT, "-m", "Maximum time allowed for transfer"),
    OptionSpec("location", OptionKind.BOOL, "-L", "Follow redirects"),
    OptionSpec("max-redirs", OptionKind.INT, None, "Maximum number of redirects allowed"),
)

OPTIONS_BY_NAME = {spec.name: spec for spec in OPTIONS}


def _collect_form(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]):
    fields: dict[str, str] = {}
    for raw in value:
        pair = parse_form_field(raw)
        if pair is None:
            raise click.BadParameter(f"expected key=value, got {raw!r}", ctx=ctx, param=param)
        fields[pair[0]] = pair[1]
    return fields


def _click_option(spec: OptionSpec) -> Callable:
    decls = [f"--{spec.name}"]
    if spec.short:
        decls.append(spec.short)
    # Keep the dashed name's parameter identifier stable (e.g. "user_agent")
    decls.append(spec.param_name)

    kwargs: dict[str, Any] = {"help": spec.help}
    if spec.kind is OptionKind.BOOL:
        kwargs["is_flag"] = True
    elif spec.kind is OptionKind.FLOAT:
        kwargs["type"] = float
    elif spec.kind is OptionKind.INT:
        kwargs["type"] = int
    elif spec.kind is OptionKind.STRING_LIST:
        kwargs["multiple"] = True
    elif spec.kind is OptionKind.STRING_MAP:
        kwargs["multiple"] = True
        kwargs["callback"] = _collect_form

    return click.option(*decls, **kwargs)


def curl_options(func: Callable) -> Callable:
    """Decorator registering every recognized curl option on a click command.

    Example:
        @click.command()
        @curl_options
        @click.argument("args", nargs=-1)
        def fetch(args, **options):
            source = ClickOptionSource(click.get_current_context())
            request = build_request(source, args)
    """
    for spec in reversed(OPTIONS):
        func = _click_option(spec)(func)
    return func


class ClickOptionSource(OptionSource):
    """Option source reading the parameters of a click context.

    An option counts as set when click got it from the command line, the
    environment or a default map, never when it holds the declared default.
    """

    def __init__(self, ctx: click.Context):
        self.ctx = ctx

    def lookup(self, name: str) -> tuple[Any, bool]:
        param_name = name.replace("-", "_")
        if param_name not in self.ctx.params:
            return None, False

        value = self.ctx.params[param_name]
        source = self.ctx.get_parameter_source(param_name)
        if value is None or source in (None, ParameterSource.DEFAULT):
            return value, False
        return value, True

    def __repr__(self) -> str:
        return f"ClickOptionSource(command={self.ctx.info_name!r})"
