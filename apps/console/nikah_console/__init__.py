"""NikahFirst console: screen controllers for the admin back office and the profile wizard.

Each controller owns its state (lists, selections, flags, error strings) and talks to
the API through :class:`nikah_console.client.ApiClient`. Rendering is left to the caller.
"""
