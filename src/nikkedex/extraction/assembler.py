# ABOUTME: Merges per-field Results into one record-level Result
# ABOUTME: A record is either fully valid or rejected with a map of every failing field

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from nikkedex.core.result import Err, Ok, Result

type ErrorReport = dict[str, str]


def assemble(fields: Mapping[str, Any]) -> Result[dict[str, Any], ErrorReport]:
    """Split a field mapping into its success values or its error report.

    Fields are visited in declared order. Plain (non-Result) values count as successes.
    Each Err contributes ``str(error)`` under its field name. The success dict is only
    returned when no field failed, so callers never see a partially filled record.
    """
    values: dict[str, Any] = {}
    errors: ErrorReport = {}

    for name, field in fields.items():
        match field:
            case Ok(value):
                values[name] = value
            case Err(error):
                errors[name] = str(error)
            case _:
                values[name] = field

    if errors:
        return Err(errors)
    return Ok(values)


def build_record[M: BaseModel](model: type[M], fields: Mapping[str, Any]) -> Result[M, ErrorReport]:
    """Assemble ``fields`` and construct ``model`` from the success side.

    The field names must be exactly the model's declared fields; a mismatch is a
    programming error in the extractor and raises ValueError.
    """
    declared = set(model.model_fields)
    given = set(fields)
    if given != declared:
        raise ValueError(
            f"{model.__name__} fields mismatch: missing={sorted(declared - given)} unexpected={sorted(given - declared)}"
        )

    return assemble(fields).map(lambda values: model(**values))
