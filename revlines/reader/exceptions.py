class UnsupportedEncodingError(Exception):
    def __init__(self, encoding, reason=""):
        self.encoding = encoding
        self.reason = reason

    def __str__(self):
        if self.reason:
            return f"Encoding '{self.encoding}' is not supported: {self.reason}"
        return f"Encoding '{self.encoding}' is not supported."


class IOFailure(Exception):
    def __init__(self, source, offset, reason=""):
        self.source = source
        self.offset = offset
        self.reason = reason

    def __str__(self):
        return f"Reading '{self.source}' before offset {self.offset} failed: {self.reason}"


class UseAfterCloseError(Exception):
    def __init__(self, source):
        self.source = source

    def __str__(self):
        return f"Reader for '{self.source}' is already closed."
