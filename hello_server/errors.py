class ServerError(Exception):
    """Base class for failures that stop the server from starting."""


class AddressInUseError(ServerError):
    def __init__(self, host: str, port: int) -> None:
        super().__init__(f"Port {port} is already in use")
        self.host = host
        self.port = port


class ListenError(ServerError):
    def __init__(self, host: str, port: int, detail: str) -> None:
        super().__init__(f"cannot listen on {host}:{port}: {detail}")
        self.host = host
        self.port = port
        self.detail = detail
