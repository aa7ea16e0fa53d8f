import argparse

from .          import __version__
from .common    import TASKGEN_TOOL_NAME


def parse(argv=None) -> dict:
    parser = argparse.ArgumentParser(
        prog=TASKGEN_TOOL_NAME,
        description="""\
Generates a Sharpliner C# task model from an Azure DevOps task reference page. \
The page's parameter table becomes one property per input, enumerated inputs \
become C# enums, and the result is printed to stdout unless --output is given.""",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("url",                metavar="URL",                         type=str,                     help="URL of the Azure DevOps task documentation page.")
    parser.add_argument("-b", "--base-class", metavar="BASE_CLASS", dest="base_class", type=str, default=None,     help="Base class of the generated C# class (default: AzureDevOpsTask).")
    parser.add_argument("-c", "--class-name", metavar="CLASS_NAME", dest="class_name", type=str, default=None,     help="Name of the generated C# class (default: <TaskName>Task).")
    parser.add_argument("-n", "--namespace",  metavar="NAMESPACE",                   type=str, default=None,       help="File-scoped namespace for the generated code.")
    parser.add_argument("-o", "--output",     metavar="OUTPUT",                      type=str, default=None,       help="Write the generated code to OUTPUT instead of stdout.")
    parser.add_argument(      "--html",       metavar="FILE",                        type=str, default=None,       help="Read the page from a saved HTML FILE instead of fetching URL.")
    parser.add_argument(      "--config",     metavar="FILE",                        type=str, default=None,       help="YAML file with taskgen configuration.")
    parser.add_argument(      "--camel-case", action="store_true", dest="camel_case",          default=False,      help="Render property names in camelCase.")
    parser.add_argument("-v", "--verbose",    action="store_true",                             default=False,      help="Also print informational diagnostics and timings.")
    parser.add_argument(      "--version",    action="version", version=f"%(prog)s {__version__}")

    return vars(parser.parse_args(argv))
