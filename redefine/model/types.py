from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional

from redefine.ast.syntax_kind import UNKNOWN

ENUM_TYPE = "$enum"
FUNCTION_TYPE = "$function"


class ComponentType(IntEnum):
    REACT_CLASS_COMPONENT = 0
    REACT_FUNCTION_COMPONENT = 1


@dataclass(frozen=True)
class ParamDef:
    name: str
    param_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.param_type}


@dataclass(frozen=True)
class PropDef:
    """
    One prop of a component. `enum_types` is set only for `$enum` props,
    `params` and `return_type` only for `$function` props.
    """
    name: str
    prop_type: str = UNKNOWN
    enum_types: Optional[List[ParamDef]] = None
    required: bool = False
    default_value: str = ""
    description: str = ""
    params: Optional[List[ParamDef]] = None
    return_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.prop_type,
            "enumOf": [e.to_dict() for e in self.enum_types] if self.enum_types is not None else None,
            "required": self.required,
            "defaultValue": self.default_value,
            "description": self.description,
            "returnType": self.return_type,
            "params": [p.to_dict() for p in self.params] if self.params is not None else None,
        }


@dataclass(frozen=True)
class Component:
    name: str
    source_path: str
    component_type: ComponentType
    description: str = ""
    props: List[PropDef] = field(default_factory=list)
    docs: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sourcePath": self.source_path,
            "componentType": int(self.component_type),
            "description": self.description,
            "props": [p.to_dict() for p in self.props],
            "docs": self.docs,
        }
