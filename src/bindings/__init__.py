"""
Headless bindings consuming the choice engine.

Modules:
- declarations: parsing of choosable / conditional block declarations
- choose: Choose and Trigger (selection)
- choice: Choice (lazy-gated conditional block) and Observe
- debug: DebugPanel over the registry and its broadcast
- page: mounting a page's declarations in one go
"""

__all__ = [
    "choice",
    "choose",
    "debug",
    "declarations",
    "page",
]
