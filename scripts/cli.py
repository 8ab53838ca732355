#!/usr/bin/env python
import importlib
import logging
import pkgutil
from traceback import print_exc

import click

import scripts
from itemsdat.core.log import setup_logger
from itemsdat.setting import setting


@click.group()
@click.option("-v", "verbose", is_flag=True, help="debug logging")
def cli(verbose: bool) -> None:
    setup_logger(log_dir=setting.log_dir, level=logging.DEBUG if verbose else logging.INFO)


def _discover_commands() -> None:
    exclude = {"__init__", "cli", "utils"}

    for _, name, ispkg in pkgutil.iter_modules(scripts.__path__, scripts.__name__ + "."):
        module_name = name.split(".")[-1]
        if module_name in exclude or ispkg:
            continue

        try:
            module = importlib.import_module(name)
        except Exception:
            print(f"MODULE: \x1b[31m{module_name}\x1b[0m", "=" * 50)
            print_exc()
            print("=" * 50)
            continue

        for attr_name in dir(module):
            if attr_name.startswith("_"):
                continue

            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and not isinstance(attr, click.Group):
                cli.add_command(attr, name=attr_name.replace("_", "-"))


_discover_commands()


if __name__ == "__main__":
    cli()
