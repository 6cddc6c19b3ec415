"""Errors raised by the design pipeline."""


class DesignError(Exception):
    """Base class for design pipeline failures."""


class TransportError(DesignError):
    """The completion stream failed or ended before its terminal event."""


class MalformedOutputError(DesignError):
    """
    The model's tool-call output is not valid JSON or does not match the schema.

    This is expected to happen now and then, since the model is not bound to
    conform. Callers surface it as a client error and may retry the request.
    """

    status_code = 400
    message = "Model did not return the expected design data"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)
