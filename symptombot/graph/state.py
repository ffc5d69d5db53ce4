import operator
from typing import Annotated, Any

from langgraph.graph import MessagesState


class AgentState(MessagesState):
    # Loop control
    rounds: int
    max_rounds: int
    round_limit_exceeded: bool

    # Every tool invocation of the turn, in execution order: {tool, args, result}
    tool_records: Annotated[list[dict[str, Any]], operator.add]

    # Terminal answer from the model
    final_response: str
