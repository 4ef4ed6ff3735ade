#!/usr/bin/env python3

import json
from pathlib import Path

from pydantic.json_schema import model_json_schema
from pass_gen.dto import PassphraseRequest, PolicyRequest
from pass_gen._conf import Settings


def execute(output_dir: str):
    for filename, builder in {
        Path(output_dir) / "policy.json": PolicyRequest,
        Path(output_dir) / "passphrase.json": PassphraseRequest,
        Path(output_dir) / "configuration.json": Settings,
    }.items():
        filename.write_text(json.dumps(model_json_schema(builder), indent=2))
        print("generated", filename)


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser(
        prog="collect_json_schemas",
        description="Collects JSON schemas of the policy and configuration files.",
    )
    parser.add_argument("output_dir")
    args = parser.parse_args()

    execute(output_dir=args.output_dir)
