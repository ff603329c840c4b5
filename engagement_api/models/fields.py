# /engagement_api/models/fields.py

from pydantic import AliasChoices, Field


def student_ref(**kwargs):
    """
    The id of the student a record belongs to. The API spells it `studentId`
    like its other camelCase fields; `student_id` is still accepted on input,
    and is the attribute name on the ORM rows the response models read from.
    """
    return Field(
        ...,
        validation_alias=AliasChoices("studentId", "student_id"),
        serialization_alias="studentId",
        **kwargs,
    )
