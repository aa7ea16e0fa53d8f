#!/usr/bin/env python3

import sys, time, datetime
from email.utils import format_datetime

from .          import __version__, state
from .args      import parse
from .state     import ARG, CFG, TaskgenConfig
from .common    import TASKGEN_TOOL_NAME, TaskgenException, file_load_yaml, file_write
from .fetch     import load_document
from .printer   import cons
from .schema    import HeaderMetadata, generate
from .schema.errors import format_diagnostics


def __load_config() -> TaskgenConfig:
    config = TaskgenConfig()
    if ARG("config", None) is not None:
        data = file_load_yaml(ARG("config")) or {}
        if not isinstance(data, dict):
            raise TaskgenException(f'"{ARG("config")}" must contain a mapping of configuration keys')
        config = TaskgenConfig.from_dict(data)

    return config.merge({
        "base_class":      ARG("base_class", None),
        "class_name":      ARG("class_name", None),
        "namespace":       ARG("namespace", None),
        "property_casing": "camel" if ARG("camel_case", False) else None,
    })


def __timestamp() -> str:
    return format_datetime(datetime.datetime.now().astimezone())


def __run():
    start = time.perf_counter()

    if ARG("verbose", False):
        cons.print(f"[dim]Configuration: {CFG()}[/dim]")

    doc = load_document(ARG("url"), CFG().user_agent, CFG().timeout, ARG("html", None))

    header = HeaderMetadata(
        tool_name=TASKGEN_TOOL_NAME,
        tool_version=__version__,
        timestamp=__timestamp(),
        source_url=ARG("url"),
    )

    with cons.section("Generating C# code..."):
        code, schema = generate(doc, header, CFG().emit_options())

        cons.print(f"Task [bold magenta]{schema.reference}[/bold magenta]: {len(schema.parameters)} parameters, {len(schema.enums)} enums")
        report = format_diagnostics(schema.diagnostics, use_rich=True, include_info=ARG("verbose", False))
        if report:
            cons.print(report)

    if ARG("output", None) is not None:
        file_write(ARG("output"), code)
        cons.print(f"[green]Generated[/green] {ARG('output')}")
    else:
        sys.stdout.write(code)

    if ARG("verbose", False):
        cons.print(f"[dim]Generation finished in {time.perf_counter() - start:.2f}s[/dim]")


def main(argv=None) -> int:
    try:
        state.gARG = parse(argv)
        state.gCFG = __load_config()

        __run()

    except TaskgenException as exc:
        cons.error(str(exc))
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception:  # pylint: disable=broad-except
        cons.print_exception()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
