"""Failures surfaced to the caller of a chat turn."""


class AgentError(RuntimeError):
    """Base class for a turn that could not be completed."""


class AgentServiceError(AgentError):
    """The language-model call failed or returned unusable output."""


class AgentRoundLimitError(AgentError):
    """The model kept requesting tools past the round ceiling."""

    def __init__(self, max_rounds: int):
        super().__init__(f"Agent did not produce a final answer within {max_rounds} rounds")
        self.max_rounds = max_rounds
