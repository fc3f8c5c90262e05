from .facts import AnnotationInterpreter, EncodingMode, encode_type, encode_value

__all__ = [
    "AnnotationInterpreter",
    "EncodingMode",
    "encode_type",
    "encode_value",
]
