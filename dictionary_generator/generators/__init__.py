"""
Generator modules for Dictionary Generator.
"""

from .dictionary_generator import (
    DictionaryGenerator,
    DictionaryLookupError,
    LookupErrorKind,
    LookupResult,
    Summary,
    create_dictionary,
)
from .word_list import (
    DictionaryRecord,
    DictionaryWriter,
    read_dictionary,
    read_word_list,
    write_resume_file,
)

__all__ = [
    'DictionaryGenerator',
    'DictionaryLookupError',
    'LookupErrorKind',
    'LookupResult',
    'Summary',
    'create_dictionary',
    'DictionaryRecord',
    'DictionaryWriter',
    'read_dictionary',
    'read_word_list',
    'write_resume_file',
]
