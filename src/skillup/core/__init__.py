"""Core business logic module.

Modules:
- security: password hashing and session tokens
- scoring: contest/assessment scoring and progress boosts
- cart: marketplace cart totals and checkout
- assessments: skill assessment bank and submissions
- mentor: AI mentor chat
- playground: practice problems and mock runner
"""

__all__ = [
    "security",
    "scoring",
    "cart",
    "assessments",
    "mentor",
    "playground",
]
