from typing import Any, TypeAlias

FieldName: TypeAlias = str
FieldSet: TypeAlias = list[FieldName]
Options: TypeAlias = dict[str, Any]
# A comparison bound: a literal, a field name, or a zero-arity function
CompareValue: TypeAlias = Any
