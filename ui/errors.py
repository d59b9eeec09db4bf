"""
ui/errors.py
============
Exceptions raised at the render boundary.
"""


class RenderInitError(RuntimeError):
    """The window, display mode or a font could not be initialised.

    Fatal: :mod:`main` logs it, stops the simulation and exits with
    status 1.
    """
