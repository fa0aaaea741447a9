"""Built-in CLI sub-commands for ramlflat.

* :mod:`~ramlflat.commands.flatten` -- simplify a whole document in one go.
* :mod:`~ramlflat.commands.inspect` -- show one part of the simplified
  document (resources, errors, traits, schemas, a resource table).
* :mod:`~ramlflat.commands.config` -- view and modify global settings.

Group modules export a :class:`typer.Typer` sub-application; single
commands like ``flatten`` export a plain callback registered on the root app.
"""
