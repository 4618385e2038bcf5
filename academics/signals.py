"""Keep offering head-counts in step with enrollments removed by cascades."""
from __future__ import annotations

import logging

from django.db.models import F
from django.db.models.signals import pre_delete
from django.dispatch import receiver

from academics.models import CourseOffering, Enrollment

logger = logging.getLogger(__name__)


@receiver(pre_delete, sender=Enrollment)
def release_seat_on_delete(sender, instance: Enrollment, **kwargs):
    # Runs inside the deleting transaction, so the seat and the row go together.
    if instance.status == "Withdrawn":
        return
    released = CourseOffering.objects.filter(pk=instance.offering_id, current_enrollment__gt=0).update(
        current_enrollment=F("current_enrollment") - 1
    )
    if released:
        logger.debug("Released seat on offering %s for deleted enrollment %s", instance.offering_id, instance.pk)
