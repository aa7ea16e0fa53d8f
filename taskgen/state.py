import typing, dataclasses

from .common       import TaskgenException
from .suggest      import invalid_key_error
from .schema       import EmitOptions
from .schema.naming import Casing
from .schema.generators.csharp_gen import DEFAULT_USINGS


DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 " \
                     "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"


@dataclasses.dataclass
class TaskgenConfig:
    # pylint: disable=too-many-instance-attributes
    base_class:      str = "AzureDevOpsTask"
    class_name:      typing.Optional[str] = None
    namespace:       typing.Optional[str] = None
    usings:          typing.List[str] = dataclasses.field(default_factory=lambda: list(DEFAULT_USINGS))
    property_casing: str = Casing.PASCAL.value
    user_agent:      str = DEFAULT_USER_AGENT
    timeout:         float = 30.0

    @staticmethod
    def from_dict(d: dict):
        """ Create a TaskgenConfig object from a dictionary whose keys are a
            subset of the fields of TaskgenConfig. Unknown keys are an error. """
        r = TaskgenConfig()

        names = [ field.name for field in dataclasses.fields(TaskgenConfig) ]
        for key, value in (d or {}).items():
            if key not in names:
                raise TaskgenException(invalid_key_error("configuration", key, names))
            setattr(r, key, value)

        r.validate()

        return r

    def validate(self) -> None:
        casings = [ c.value for c in Casing ]
        if self.property_casing not in casings:
            raise TaskgenException(f"'property_casing' must be one of {casings}, got '{self.property_casing}'")

        if not isinstance(self.usings, list) or not all(isinstance(u, str) for u in self.usings):
            raise TaskgenException("'usings' must be a list of namespace names")

    def emit_options(self) -> EmitOptions:
        """ Rendering options for the code emitter. """
        return EmitOptions(
            base_class=self.base_class,
            class_name=self.class_name,
            namespace=self.namespace,
            usings=tuple(self.usings),
            property_casing=Casing(self.property_casing),
        )

    def items(self) -> typing.Iterable[typing.Tuple[str, typing.Any]]:
        return dataclasses.asdict(self).items()

    def merge(self, overrides: dict) -> "TaskgenConfig":
        """ Returns a copy with every non-None value of overrides applied. """
        values = dict(self.items())
        values.update({ k: v for k, v in overrides.items() if v is not None and k in values })
        return TaskgenConfig.from_dict(values)

    def __str__(self) -> str:
        """ Returns a string like "base_class=AzureDevOpsTask & namespace=None" """
        return ' & '.join(f"{k}={v}" for k, v in self.items() if k not in ("user_agent", "usings"))


gCFG: TaskgenConfig = TaskgenConfig()
gARG: dict          = {}

def ARG(arg: str, dflt = None) -> typing.Any:
    # pylint: disable=global-variable-not-assigned
    global gARG
    if arg in gARG:
        return gARG[arg]
    if dflt is not None:
        return dflt

    raise KeyError(f"{arg} is not an argument.")

def CFG() -> TaskgenConfig:
    # pylint: disable=global-variable-not-assigned
    global gCFG
    return gCFG
