"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by the stdio server and the CLI.
"""

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "find_levels": {
        "name": "find_levels",
        "description": """Search Geometry Dash levels, then filter each level's detail locally (object counts, object ids, exact length, difficulty).

find_levels(query="bloodbath", difficulty="demon") → matching levels, page 1
find_levels(minobjects=1000, requiredobjectids="1,2,57") → levels using all three objects
find_levels(exactlengthseconds=62, page=2) → second page of 5
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Free-text search (level name / creator)"
                },
                "lengthcategory": {
                    "type": "string",
                    "enum": ["short", "normal", "long", "xl"],
                    "description": "Remote-side length bucket"
                },
                "exactlengthseconds": {
                    "type": "integer",
                    "description": "Exact level length in seconds (±0.3s); levels without timing data are dropped"
                },
                "minobjects": {
                    "type": "integer",
                    "description": "Minimum object count"
                },
                "maxobjects": {
                    "type": "integer",
                    "description": "Maximum object count"
                },
                "exactobjects": {
                    "type": "integer",
                    "description": "Exact object count (overrides min/max)"
                },
                "requiredobjectids": {
                    "type": "string",
                    "description": "Comma-separated object ids that must all appear (e.g. 1,57,100)"
                },
                "difficulty": {
                    "type": "string",
                    "enum": ["auto", "easy", "normal", "hard", "harder", "insane", "demon"],
                    "description": "Difficulty filter (auto disables it)",
                    "default": "auto"
                },
                "limit": {
                    "type": "integer",
                    "description": "How many levels to check (1-100)",
                    "default": 30
                },
                "page": {
                    "type": "integer",
                    "description": "Result page, 1-based (5 levels per page)",
                    "default": 1
                }
            },
            "required": []
        }
    }
}
