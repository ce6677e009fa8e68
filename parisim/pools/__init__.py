"""Device record pools and pool algebra."""
from .records import IndexedAttribute, Pool, ScalarAttribute
from .algebra import append, check_schema, concat, empty_like, merge, replicate, take
from .devices import VIRTUAL_FIELDS, create_mfcw_setup, create_std_reader, create_std_tag

__all__ = [
    'IndexedAttribute', 'Pool', 'ScalarAttribute',
    'append', 'check_schema', 'concat', 'empty_like', 'merge', 'replicate', 'take',
    'VIRTUAL_FIELDS', 'create_mfcw_setup', 'create_std_reader', 'create_std_tag',
]
