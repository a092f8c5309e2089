# our public exports, relatively minimal
from boolvec import operations as operations
from boolvec.exc import (
    BitVectorError as BitVectorError,
    IndexOutOfRangeError as IndexOutOfRangeError,
    InvalidValueError as InvalidValueError,
    OutOfRangeError as OutOfRangeError,
    RangeExceededError as RangeExceededError,
    SizeMismatchError as SizeMismatchError,
)
from boolvec.factories import (
    from_array as from_array,
    from_bools as from_bools,
    from_flag_objects as from_flag_objects,
    from_indices as from_indices,
    from_raw_words as from_raw_words,
)
from boolvec.utils import install_trace_level
from boolvec.utils.validation import is_safe_value as is_safe_value, validate as validate
from boolvec.utils.words import MAX_SAFE_SIZE as MAX_SAFE_SIZE
from boolvec.vector import PackedBitVector as PackedBitVector

install_trace_level()
