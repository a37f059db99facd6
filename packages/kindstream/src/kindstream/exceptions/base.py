# kindstream/exceptions/base.py


class KindStreamError(Exception):
    """Base for all kindstream exceptions."""
