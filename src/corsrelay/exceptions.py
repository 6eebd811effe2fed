class RelayException(Exception):
    status_code = 500
    source = "relay"

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationException(RelayException):
    pass


class InvalidURLException(RelayException):
    status_code = 400

    def __init__(self, message="Invalid URL"):
        super().__init__(message)


class FetchException(RelayException):
    pass


class UpstreamException(RelayException):
    source = "upstream"

    def __init__(self, status_code: int):
        # 1xx, 204 and 304 responses must not carry a body
        if status_code < 200 or status_code in (204, 304):
            super().__init__("")
        else:
            super().__init__(f"HTTP Error: {status_code}")
        self.status_code = status_code
