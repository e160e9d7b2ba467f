r"""@package symdiff.settings

Global configuration of the expression system.

The settings are stored as class attributes of Settings and can be changed
directly, temporarily via the Settings.override() context or by reading
configuration files with load_settings(). The latter reads a ``[symdiff]``
section, for example:

```
    [symdiff]
    numeric_errors = warn
    check_arity = yes
    processes = 4
```

A personal ``config.mine.cfg`` next to a shared ``config.cfg`` takes
precedence, since later files override values of earlier ones.
"""

from configparser import ConfigParser
from contextlib import contextmanager
import logging
import os.path as op


__all__ = [
    "Settings",
    "load_settings",
]


logger = logging.getLogger(__name__)

_NUMERIC_ERROR_MODES = ("ignore", "warn", "raise", "print")


class Settings(object):
    """Global settings for building and evaluating terms."""
    ## How NumPy should treat floating point errors during evaluation.
    ## Division by zero and out-of-domain values produce `inf`/`nan` with the
    ## default `'ignore'`.
    numeric_errors = "ignore"
    ## Whether evaluators check the argument count against the term's arity
    ## before evaluating.
    check_arity = True
    ## Default number of processes for evaluators.evaluate_many(). `None`
    ## means evaluating in the current process.
    processes = None

    @classmethod
    def as_dict(cls):
        r"""Return the current settings as a dictionary."""
        return dict(numeric_errors=cls.numeric_errors,
                    check_arity=cls.check_arity,
                    processes=cls.processes)

    @classmethod
    def update(cls, **kw):
        r"""Change one or more settings, validating the new values."""
        for key, value in kw.items():
            if key not in ("numeric_errors", "check_arity", "processes"):
                raise TypeError("Unknown setting: %s" % key)
            if key == "numeric_errors" and value not in _NUMERIC_ERROR_MODES:
                raise ValueError("Invalid numeric error mode %r. Valid modes: %s"
                                 % (value, ", ".join(_NUMERIC_ERROR_MODES)))
            setattr(cls, key, value)

    @classmethod
    @contextmanager
    def override(cls, **kw):
        r"""Context manager to temporarily change settings.

        @b Examples

        ```
            with Settings.override(numeric_errors='raise'):
                evaluate(x/y, [1, 0]) # raises FloatingPointError
        ```
        """
        previous = cls.as_dict()
        try:
            cls.update(**kw)
            yield cls
        finally:
            cls.update(**previous)


def load_settings(*filenames):
    r"""Read settings from configuration files and apply them.

    Files that don't exist are skipped. When no file name is given,
    ``config.cfg`` and ``config.mine.cfg`` in the current working directory
    are tried.

    @return List of files that were successfully read.
    """
    if not filenames:
        filenames = ("config.cfg", "config.mine.cfg")
    config = ConfigParser()
    found = config.read([op.expanduser(f) for f in filenames])
    if not config.has_section("symdiff"):
        return found
    section = config["symdiff"]
    kw = dict()
    if "numeric_errors" in section:
        kw["numeric_errors"] = section.get("numeric_errors").strip()
    if "check_arity" in section:
        kw["check_arity"] = section.getboolean("check_arity")
    if "processes" in section:
        value = section.get("processes").strip()
        kw["processes"] = None if value.lower() in ("", "none") else int(value)
    Settings.update(**kw)
    logger.info("Settings loaded from %s: %s", ", ".join(found), kw)
    return found
