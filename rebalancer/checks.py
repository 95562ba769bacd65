"""
Django system checks for the rebalancer app.

Run with `manage.py check` and on server startup. They validate the
``REBALANCER`` settings so a bad tolerance fails loudly before any request.
"""

from django.core.checks import Error, Warning, register
from django.core.exceptions import ImproperlyConfigured

from rebalancer import conf


@register()
def check_rebalancer_tolerances(app_configs, **kwargs):
    """
    Tolerances must parse as non-negative decimals.

    Returns:
        List of Error objects for unusable values.
    """
    errors = []
    for name in ("HOLD_TOLERANCE", "TARGET_SUM_TOLERANCE"):
        try:
            conf.get_decimal_setting(name)
        except ImproperlyConfigured as e:
            errors.append(
                Error(
                    str(e),
                    hint=f"Set REBALANCER['{name}'] to a non-negative number, e.g. '0.005'",
                    id="rebalancer.E001",
                )
            )
    return errors


@register()
def check_rebalancer_unknown_keys(app_configs, **kwargs):
    """Warn about typos in the REBALANCER dict."""
    from django.conf import settings

    configured = getattr(settings, "REBALANCER", {}) or {}
    unknown = sorted(set(configured) - set(conf.DEFAULTS))
    if unknown:
        return [
            Warning(
                f"Unknown REBALANCER settings: {', '.join(unknown)}",
                hint=f"Valid keys: {', '.join(sorted(conf.DEFAULTS))}",
                id="rebalancer.W001",
            )
        ]
    return []
