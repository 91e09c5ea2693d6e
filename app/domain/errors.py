from typing import Optional

SERVICE_IS_YET_TO_INITIALISE_ERR = "The service is yet to initialise, please try again soon"


class GatewayAPIError(RuntimeError):
    """A call to the gateway REST API failed.

    ``status`` is the HTTP status the gateway answered with, or ``None`` when it
    could not be reached at all. ``call_info`` describes the call for the logs.
    """

    def __init__(self, status: Optional[int], call_info: str):
        super().__init__(f"Gateway call failed - {call_info}")
        self.status = status
        self.call_info = call_info

    @property
    def not_found(self) -> bool:
        return self.status == 404


class ServiceNotInitialisedError(RuntimeError):
    def __init__(self, message: str = SERVICE_IS_YET_TO_INITIALISE_ERR):
        super().__init__(message)


class DeploymentReportError(RuntimeError):
    """The deployment outcome could not be reported back to the gateway."""
