"""LangGraph workspace agent with a human approval gate.

CRITICAL patterns:
- Pass checkpointer to compile(), not invoke()
- interrupt() pauses the run inside the approval node; resume with
  Command(resume=decision) on the same thread_id
- Every tool call in an AIMessage must be answered by a ToolMessage, also
  when the user rejects it
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import BaseTool
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.graph import StateGraph, MessagesState, START, END
from langgraph.prebuilt import ToolNode
from langgraph.types import Command, interrupt

from ..errors import ConfigurationError
from ..tools.sandbox import LocalSandbox
from ..tools.workspace_tools import create_workspace_tools
from .checkpoints import ThreadCheckpointer

logger = logging.getLogger(__name__)

APPROVE = "approve"
REJECT = "reject"


def _parse_decision(decision: Any) -> Tuple[bool, Optional[str]]:
    """
    Normalize a resume value into (approved, message).

    Accepts True/False, "approve"/"reject", or a dict with a "type" key and
    an optional "message".
    """
    if isinstance(decision, bool):
        return decision, None
    if isinstance(decision, str):
        decision = {"type": decision}
    if isinstance(decision, Mapping) and decision.get("type") in (APPROVE, REJECT):
        return decision["type"] == APPROVE, decision.get("message")
    raise ValueError(f"Unrecognized approval decision: {decision!r}")


def create_workspace_agent(
    model: Union[BaseChatModel, str],
    checkpointer: BaseCheckpointSaver,
    backend: LocalSandbox,
    system_prompt: str,
    filesystem_system_prompt: str,
    interrupt_on: Mapping[str, bool],
    tools: Optional[Sequence[BaseTool]] = None,
):
    """
    Create the agent graph.

    Args:
        model: Chat model, or a model string for init_chat_model to interpret
        checkpointer: Checkpoint saver for the conversation thread
        backend: Execution backend the workspace tools operate on
        system_prompt: Main system prompt
        filesystem_system_prompt: Prompt describing the filesystem tools
        interrupt_on: Tool names mapped to whether they need approval
        tools: Extra tools in addition to the workspace tools

    Returns:
        Compiled StateGraph

    Raises:
        ConfigurationError: If a model string cannot be turned into a chat model
    """
    if isinstance(model, str):
        logger.info(f"Initializing chat model from string '{model}'")
        try:
            chat_model = init_chat_model(model)
        except (ValueError, ImportError) as e:
            raise ConfigurationError(f"Cannot initialize model '{model}': {e}") from e
    else:
        chat_model = model

    all_tools: List[BaseTool] = create_workspace_tools(backend) + list(tools or [])
    bound_model = chat_model.bind_tools(all_tools)
    system_message = SystemMessage(
        content=f"{system_prompt}\n\n{filesystem_system_prompt}"
    )
    gated = {name for name, enabled in interrupt_on.items() if enabled}

    async def agent_node(state: MessagesState) -> Dict[str, Any]:
        response = await bound_model.ainvoke([system_message] + state["messages"])
        return {"messages": [response]}

    def route_from_agent(state: MessagesState) -> str:
        last = state["messages"][-1]
        tool_calls = getattr(last, "tool_calls", None)
        if not tool_calls:
            return END
        if any(call["name"] in gated for call in tool_calls):
            return "approval"
        return "tools"

    def approval_node(state: MessagesState) -> Command:
        last: AIMessage = state["messages"][-1]
        action_requests = [
            {"name": call["name"], "args": call["args"], "id": call["id"]}
            for call in last.tool_calls
            if call["name"] in gated
        ]
        logger.info(f"Awaiting approval for {[r['name'] for r in action_requests]}")

        approved, message = _parse_decision(
            interrupt({"action_requests": action_requests})
        )
        if approved:
            return Command(goto="tools")

        reason = message or "The user rejected this action."
        rejections = [
            ToolMessage(
                content=(
                    reason
                    if call["name"] in gated
                    else "Not run because another action in this step was rejected."
                ),
                tool_call_id=call["id"],
                name=call["name"],
                status="error",
            )
            for call in last.tool_calls
        ]
        logger.info("Actions rejected, returning to agent")
        return Command(goto="agent", update={"messages": rejections})

    graph = StateGraph(MessagesState)
    graph.add_node("agent", agent_node)
    graph.add_node("approval", approval_node)
    graph.add_node("tools", ToolNode(all_tools))

    graph.add_edge(START, "agent")
    graph.add_conditional_edges(
        "agent",
        route_from_agent,
        {"approval": "approval", "tools": "tools", END: END},
    )
    graph.add_edge("tools", "agent")

    # CRITICAL: checkpointer at compile time
    return graph.compile(checkpointer=checkpointer)


@dataclass
class AgentRuntime:
    """
    An assembled agent for one conversation thread.

    Holds references to its model, checkpointer and backend for the duration
    of the conversation. The checkpointer's registry entry outlives it.
    """

    thread_id: str
    graph: Any
    model: Union[BaseChatModel, str]
    checkpointer: ThreadCheckpointer
    backend: LocalSandbox
    system_prompt: str
    filesystem_system_prompt: str
    interrupt_on: Dict[str, bool]

    @property
    def config(self) -> Dict[str, Any]:
        """LangGraph run config addressing this thread."""
        return {"configurable": {"thread_id": self.thread_id}}

    async def ainvoke(self, message: str) -> Dict[str, Any]:
        """Run one turn with a user message."""
        return await self.graph.ainvoke(
            {"messages": [HumanMessage(content=message)]},
            config=self.config,
        )

    async def aresume(self, decision: Any = APPROVE) -> Dict[str, Any]:
        """Resume a run paused at the approval gate."""
        return await self.graph.ainvoke(Command(resume=decision), config=self.config)

    async def aget_pending_actions(self) -> List[Dict[str, Any]]:
        """
        Get the actions waiting for approval.

        Returns:
            Action requests of the current interrupt, empty if not paused
        """
        snapshot = await self.graph.aget_state(self.config)
        return [
            request
            for task in snapshot.tasks
            for pending in task.interrupts
            for request in pending.value.get("action_requests", [])
        ]
