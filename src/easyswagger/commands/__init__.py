"""Built-in CLI sub-commands for easyswagger.

* :mod:`~easyswagger.commands.browse` -- ``paths``, ``show``, ``copy``, and
  ``forget``, registered directly on the root app.
* :mod:`~easyswagger.commands.config` -- ``config show|set|reset`` and
  ``cache stats|clear`` sub-command groups.
"""
