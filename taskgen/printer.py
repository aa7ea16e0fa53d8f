import typing, contextlib

import rich, rich.console


class TaskgenPrinter:
    """
    Progress and error output of the command line tool.

    Generated code is the only thing written to stdout, so the console this
    prints to is stderr. Nested steps are shown with an indent stack.
    """

    def __init__(self, stderr: bool = True):
        self.stack = []
        self.raw   = rich.console.Console(stderr=stderr)

    def reset(self):
        self.stack = []

    def indent(self, msg: str = None):
        self.stack.append(msg if msg is not None else "  ")

    def unindent(self, times: int = 1):
        for _ in range(times):
            self.stack.pop()

    @contextlib.contextmanager
    def section(self, title: str):
        """Print title, then indent everything printed inside the block."""
        self.print(title)
        self.indent()
        try:
            yield
        finally:
            self.unindent()

    def print(self, msg: typing.Any = None, **kwargs):
        prefix = ''.join(self.stack)
        lines  = str(msg if msg is not None else "").split('\n')

        self.raw.print('\n'.join(f"{prefix}{line}" for line in lines), soft_wrap=True, **kwargs)

    def error(self, msg: str):
        self.reset()
        self.print(f"\n[bold red]Error[/bold red]: {msg}\n")

    def print_exception(self):
        self.reset()
        self.raw.print_exception()


cons = TaskgenPrinter()
