# backend/hn_core/iam/signals.py
"""
Hot-reload of the shared role registry after role edits commit.

Only active when ACCESS_CONTROL["ROLE_SOURCE"] == "database". Every edit queues an
on_commit callback; callbacks from one transaction share a batch and only the
first one reloads. A rolled-back transaction runs none of them.

A failed reload (rows breaking the catalog invariants, database errors) is logged
as a configuration defect and the current table stays in place.
"""
from __future__ import annotations

import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from hn_core.access.bootstrap import ROLE_SOURCE_DATABASE, access_settings, load_role_registry
from hn_core.iam.models import Permission, Role, RolePermission

logger = logging.getLogger(__name__)

_BATCH_ATTR = "_hn_role_reload_batch"


class _ReloadBatch:
    __slots__ = ("done",)

    def __init__(self):
        self.done = False


def _reload_after_commit(batch: _ReloadBatch) -> None:
    if batch.done:
        return
    batch.done = True
    if load_role_registry(ROLE_SOURCE_DATABASE):
        logger.info("role registry reloaded after commit")


def schedule_role_registry_reload() -> bool:
    """
    Queue a registry reload for the current transaction.
    Returns False when the registry is not database-backed.
    """
    if access_settings()["ROLE_SOURCE"] != ROLE_SOURCE_DATABASE:
        return False

    connection = transaction.get_connection()
    # A batch left undone by a rolled-back transaction is reused by the next one.
    batch = getattr(connection, _BATCH_ATTR, None)
    if batch is None or batch.done:
        batch = _ReloadBatch()
        setattr(connection, _BATCH_ATTR, batch)

    transaction.on_commit(partial(_reload_after_commit, batch))
    return True


@receiver(post_save, sender=Role)
@receiver(post_delete, sender=Role)
@receiver(post_save, sender=Permission)
@receiver(post_delete, sender=Permission)
@receiver(post_save, sender=RolePermission)
@receiver(post_delete, sender=RolePermission)
def on_role_catalog_change(sender, **kwargs):
    schedule_role_registry_reload()
