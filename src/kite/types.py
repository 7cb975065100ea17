from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional
from typing_extensions import TypeAlias
from .tree import Node
from .utils import int_to_decimal

# ---------- Value Model ----------

class Kind(Enum):
    INTEGER = "INTEGER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ARRAY = "ARRAY"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value

@dataclass
class KtInteger:
    value: int
    def kind(self) -> Kind:
        return Kind.INTEGER
    def render(self) -> str:
        return int_to_decimal(self.value)
    def __repr__(self) -> str:
        return f"KtInteger(value={int_to_decimal(self.value)})"

@dataclass
class KtString:
    value: str
    def kind(self) -> Kind:
        return Kind.STRING
    def render(self) -> str:
        return self.value

@dataclass
class KtBool:
    value: bool
    def kind(self) -> Kind:
        return Kind.BOOLEAN
    def render(self) -> str:
        return "true" if self.value else "false"

@dataclass
class KtNull:
    def kind(self) -> Kind:
        return Kind.NULL
    def render(self) -> str:
        return "null"

@dataclass
class KtArray:
    elements: List['KtValue']
    def kind(self) -> Kind:
        return Kind.ARRAY
    def render(self) -> str:
        parts = []

        for item in self.elements:
            if isinstance(item, KtString):
                parts.append(f'"{item.value}"')
            else:
                parts.append(item.render())

        return "[" + ", ".join(parts) + "]"

@dataclass
class KtFunction:
    params: List[str]
    body: Node                   # block node
    env: 'Environment'           # captured (defining) environment, shared by reference
    def kind(self) -> Kind:
        return Kind.FUNCTION
    def render(self) -> str:
        return f"function({', '.join(self.params)}) {{ ... }}"
    def __repr__(self) -> str:
        return f"<function params={', '.join(self.params) or 'nullary'}>"

BuiltinFn = Callable[[List['KtValue']], 'KtValue']

@dataclass(frozen=True)
class KtBuiltin:
    name: str
    fn: BuiltinFn = field(compare=False, repr=False)
    def kind(self) -> Kind:
        return Kind.BUILTIN
    def render(self) -> str:
        return f"builtin {self.name}"

@dataclass
class KtReturn:
    """Internal carrier for `return`; unwrapped at call and program boundaries."""
    value: 'KtValue'
    def kind(self) -> Kind:
        return Kind.RETURN_VALUE
    def render(self) -> str:
        return self.value.render()

@dataclass
class KtError:
    message: str
    def kind(self) -> Kind:
        return Kind.ERROR
    def render(self) -> str:
        return f"ERROR: {self.message}"

KtValue: TypeAlias = (
    KtInteger
    | KtString
    | KtBool
    | KtNull
    | KtArray
    | KtFunction
    | KtBuiltin
    | KtReturn
    | KtError
)

# Canonical singletons; truthiness and bang compare against these.
TRUE = KtBool(True)
FALSE = KtBool(False)
NULL = KtNull()

def native_bool(flag: bool) -> KtBool:
    return TRUE if flag else FALSE

# ---------- Environment ----------

class Environment:
    def __init__(self, outer: Optional['Environment']=None):
        self.outer = outer
        self.store: Dict[str, KtValue] = {}

    def get(self, name: str) -> Optional[KtValue]:
        env: Optional[Environment] = self

        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer

        return None

    def set(self, name: str, val: KtValue) -> None:
        # always the innermost scope; an outer binding of the same name is shadowed
        self.store[name] = val

    def has_local(self, name: str) -> bool:
        return name in self.store

    def __repr__(self) -> str:
        return f"<Environment names={sorted(self.store)} nested={self.outer is not None}>"

def new_environment() -> Environment:
    return Environment()

def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)

# ---------- Host exceptions (language failures are KtError values) ----------

class KiteError(Exception):
    pass

class KiteRuntimeError(KiteError):
    """Raised for trees the parser can never produce."""

class KiteParseError(KiteError):
    def __init__(
        self,
        message: str,
        line: Optional[int]=None,
        column: Optional[int]=None,
        end_line: Optional[int]=None,
        end_column: Optional[int]=None,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.end_line = end_line
        self.end_column = end_column

    def __str__(self) -> str:
        if self.line is None:
            return self.message

        if self.column is None:
            return f"{self.message} (line {self.line})"

        return f"{self.message} (line {self.line}, col {self.column})"

class Builtins:
    functions: Dict[str, KtBuiltin] = {}
