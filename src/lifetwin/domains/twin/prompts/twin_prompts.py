"""MCP Prompts: pre-built interaction templates for twin user journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_twin_prompts(mcp: FastMCP) -> None:
    """Register digital twin MCP prompts."""

    @mcp.prompt()
    def twin_review_prompt(mode: str = "life") -> str:
        """Prompt template for reviewing a twin simulation."""
        return f"""I'd like to review my {mode} twin. Please run the simulation on my snapshot and walk me through:

1. My scores and what is pulling them down
2. Where my current path leads in 12 months versus the improved path
3. The warnings I should deal with first
4. One or two changes that help both my health and my money

Please be honest but encouraging. These projections are estimates, not medical or financial advice."""

    @mcp.prompt()
    def spending_cut_prompt(monthly_target: str = "$300") -> str:
        """Prompt template for finding spending cuts that also help health."""
        return f"""I want to free up about {monthly_target} a month. Using my money twin:

1. Show which discretionary categories (eating out, late-night food, alcohol, subscriptions) cost the most
2. Compare my baseline and improved savings and net worth after 12 months
3. Point out any cut that also improves weight, sleep or labs
4. Suggest a realistic order to make the cuts

Keep it practical: I need changes I can actually stick to."""
