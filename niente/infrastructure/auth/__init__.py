from .tokens import build_access_token, decode_access_token

__all__ = [
    "build_access_token",
    "decode_access_token",
]
