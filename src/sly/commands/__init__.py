"""Built-in CLI sub-commands for sly.

* :mod:`~sly.commands.browse` -- ``products``, ``people`` and ``items``
  listings plus ``item`` for one item.
* :mod:`~sly.commands.edit` -- ``add`` and ``update``.
* :mod:`~sly.commands.config` -- ``setup`` and the ``config`` group.
* :mod:`~sly.commands.cache` -- the ``cache`` group.

Listing and editing commands obtain their :class:`~sly.interface.Interface`
through :func:`~sly.commands._common.interface_or_exit`.
"""
