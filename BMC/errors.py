class CodecError(ValueError):
    """Base class for every failure raised while compressing or expanding."""


class LengthOverflow(CodecError):
    pass


class RunLengthOverflow(CodecError):
    pass


class CorruptStream(CodecError):
    pass


class EndOfInput(CodecError, EOFError):
    """A field was requested but the source has too few bits left."""


class TruncatedStream(EndOfInput):
    pass
