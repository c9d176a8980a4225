"""
The serializer package houses all the schemas for the input/output in the system.
The serializers are used to generate and validate any raw data (such as JSON)
going in and out of the system.

.. note:: Unfortunately marshmallow does not play well with sphinx-autodoc,
    stripping out the :class:`~marshmallow.fields.Field` declarations from
    the schema definition. It is recommended that you look at the code directly.
"""

from .fields import EnumField, NotBlank
from .problem import ProblemSchema, problem_response
from .decorators import expects, expects_json, returns
