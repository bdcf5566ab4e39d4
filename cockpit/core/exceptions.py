class CockpitError(Exception):
    """Base exception for the scenario cockpit."""

    status_code = 500


class ScenarioNotFoundError(CockpitError):
    """Raised when a scenario id does not resolve within a project."""

    status_code = 404

    def __init__(self, scenario_id: str):
        self.scenario_id = scenario_id
        super().__init__(f"Scenario not found: {scenario_id}")


class DriftAlertNotFoundError(CockpitError):
    """Raised when a drift alert id does not resolve within a project."""

    status_code = 404

    def __init__(self, alert_id: str):
        self.alert_id = alert_id
        super().__init__(f"Drift alert not found: {alert_id}")


class DecisionEventNotFoundError(CockpitError):
    """Raised when a decision event id does not resolve within a project."""

    status_code = 404

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Decision event not found: {event_id}")


class PinLimitExceededError(CockpitError):
    """Raised when pinning would exceed the per-project pin limit."""

    status_code = 409

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum {limit} pinned scenarios allowed")


class ConfirmationRequiredError(CockpitError):
    """Raised when a mutation that needs explicit confirmation was not confirmed."""

    status_code = 400


class ComputeFunctionError(CockpitError):
    """Raised when a remote compute function fails or returns a structured error."""

    status_code = 502

    def __init__(self, function_name: str, message: str, status: int | None = None):
        self.function_name = function_name
        self.status = status
        super().__init__(f"Compute function '{function_name}' failed: {message}")
