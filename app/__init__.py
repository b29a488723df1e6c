"""
FreeGames application package.

Layered the same way as the rest of the project:

  app/repositories/  — pure I/O: reading locale files from disk.
  app/services/      — catalog logic: facets, filtering, view models and the
                       ``CatalogBrowser`` controller that owns the loaded games.

``freegames.py`` provides the API client and the CLI; ``freegames_gui.py``
exposes a ``CatalogBrowser`` through Flask routes and a Jinja template.
"""
