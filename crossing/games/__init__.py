"""
Games module - Puzzle-specific content.

Each puzzle has its own subpackage with:
- Roster definition
- Rule text for display
- Initial state construction
"""
