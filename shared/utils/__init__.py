from .common import default_hostname, split_address

__all__ = ["split_address", "default_hostname"]
