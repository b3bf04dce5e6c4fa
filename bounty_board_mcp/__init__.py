"""
Bounty Board MCP server package.

This package exposes the AI Bounty Board REST API as MCP tools so agents can
discover, claim, and submit bounties. See DESIGN.md for full details.
"""
