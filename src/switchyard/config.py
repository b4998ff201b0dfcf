"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation and shared by a
router and every sub-router created from it.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(max_form_memory=1 << 20)
        router = Router("/", config=config)
    """

    # Method override: a POSTed form field naming the effective method
    method_override: bool = True
    method_override_field: str = "_method"

    # Limits
    max_form_memory: int = 10 << 20  # 10 MiB, read while looking for the override field
