"""
MenuBot.

Point, snap, decide: turns a photographed restaurant menu into a ranked,
budget-aware set of healthy recommendations.

Structure:
- domain/: Menu models, scoring, validation and narration text
- infrastructure/: External concerns (settings, OpenAI, stub provider)
- application/: Use cases orchestrating domain and providers
- tests/: Test suite
"""

__version__ = "1.0.0"
