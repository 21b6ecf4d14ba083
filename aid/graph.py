"""LangGraph StateGraph for one run: critique, and on failure explain the failure."""

from langgraph.graph import END, StateGraph

from aid.analysis import analyze
from aid.state import RunState


def _route_after_analysis(state: RunState) -> str:
    """Conditional edge: accept a successful critique, otherwise explain the failure."""
    if state["result"].get("ok"):
        return "accept"
    return "explain"


def _accept(state: RunState) -> dict:
    """The critique becomes the output verbatim."""
    return {"output": state["result"]["text"]}


def build_run_graph(llm=None):
    """Compile the run workflow.

    analyze -> accept -> END on success.
    analyze -> explain -> END on failure; explain issues a second, targeted
    call with the first failure's message as error context.
    """

    def _analyze(state: RunState) -> dict:
        return {"result": analyze(state["code"], llm=llm)}

    def _explain(state: RunState) -> dict:
        explanation = analyze(state["code"], state["result"]["message"], llm=llm)
        if explanation.get("ok"):
            text = explanation["text"]
        else:
            text = explanation["message"]
        return {"explanation": explanation, "output": f"Error: {text}"}

    workflow = StateGraph(RunState)

    workflow.add_node("analyze", _analyze)
    workflow.add_node("accept", _accept)
    workflow.add_node("explain", _explain)

    workflow.set_entry_point("analyze")

    workflow.add_conditional_edges(
        "analyze",
        _route_after_analysis,
        {
            "accept": "accept",
            "explain": "explain",
        },
    )

    workflow.add_edge("accept", END)
    workflow.add_edge("explain", END)

    return workflow.compile()


graph = build_run_graph()


def produce_output(code: str, llm=None) -> str:
    """Run the workflow for ``code`` and return the text for the output pane."""
    run_graph = graph if llm is None else build_run_graph(llm)
    final_state = run_graph.invoke({"code": code})
    return final_state["output"]
