#!/usr/bin/env python3

import logging
import pathlib

import click
import lazy_object_proxy
import pydantic
from pydantic.alias_generators import to_snake

from pass_gen._cli.commands.generate import generate
from pass_gen._cli.commands.passphrase import passphrase
from pass_gen._cli.exc import ConfigSyntaxError, ConfigValidationError, Location
from pass_gen._conf import Settings
from pass_gen.util.model import convert_errors

ConfigOption = pathlib.Path | None


def validate_config(ctx: click.Context, fn: ConfigOption) -> Settings:
    payload = {}

    if fn is not None:
        from ruamel import yaml
        from ruamel.yaml.error import YAMLError

        _loader = yaml.YAML(typ="safe")

        try:
            payload = _loader.load(fn.read_bytes()) or {}
        except YAMLError as ex:
            raise ConfigSyntaxError(
                str(ex),
                ctx=ConfigSyntaxError.Context(loc=Location(filename=fn)),
            ) from ex

    # keys may be written in camelCase or snake_case
    if isinstance(payload, dict):
        payload = {
            to_snake(key) if isinstance(key, str) else key: value
            for key, value in payload.items()
        }

    try:
        res = Settings(**payload)
    except (pydantic.ValidationError, TypeError) as ex:
        if isinstance(ex, pydantic.ValidationError):
            ex_msg = "\n".join(
                "  %s: %s" % (".".join(map(str, err["loc"])), err["msg"])
                for err in convert_errors(ex)
            )
        else:
            ex_msg = "Input must be a valid mapping"
        raise ConfigValidationError(ex_msg) from ex

    assert isinstance(res, Settings), "Expected %r, got %r" % (
        Settings.__name__,
        res,
    )
    return res


@click.group()
@click.option("-D", "--debug/--no-debug", default=False, help="Enable debug mode.")
@click.option(
    "-c",
    "--config",
    type=click.Path(
        dir_okay=False,
        exists=True,
        readable=True,
        path_type=pathlib.Path,
    ),
    help="Path to a YAML configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: ConfigOption) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
    )
    ctx.obj = lazy_object_proxy.Proxy(lambda: validate_config(ctx=ctx, fn=config))


cli.add_command(generate)
cli.add_command(passphrase)


def main() -> None:
    cli(auto_envvar_prefix="PASS_GEN")


if __name__ == "__main__":
    main()
