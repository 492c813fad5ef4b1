"""
Versioned storage of validation outcomes.

Exactly one CriteriaSite row exists per (polygon, criteria) pair. Writing a
new outcome for an existing pair first copies the previous values into
CriteriaSiteHistoric, then refreshes the current row, all in one transaction.
"""
import logging
from typing import Iterable, List, Optional

from django.db import IntegrityError, transaction
from django.utils import timezone

from restoration.models import CriteriaSite, CriteriaSiteHistoric

logger = logging.getLogger(__name__)


class ResultStore:

    def write_result(self, polygon_uuid: str, criteria_id: int, valid: bool, extra_info=None) -> CriteriaSite:
        with transaction.atomic():
            current = (
                CriteriaSite.objects.select_for_update()
                .filter(polygon_uuid=polygon_uuid, criteria_id=criteria_id)
                .first()
            )
            if current is None:
                try:
                    with transaction.atomic():
                        created = CriteriaSite.objects.create(
                            polygon_uuid=polygon_uuid,
                            criteria_id=criteria_id,
                            valid=valid,
                            extra_info=extra_info,
                            created_at=timezone.now(),
                        )
                    logger.debug(f"Created criteria {criteria_id} result for polygon {polygon_uuid}: valid={valid}")
                    return created
                except IntegrityError:
                    # Another writer inserted the pair first; replace its row instead
                    current = CriteriaSite.objects.select_for_update().get(
                        polygon_uuid=polygon_uuid,
                        criteria_id=criteria_id,
                    )

            CriteriaSiteHistoric.objects.create(
                polygon_uuid=current.polygon_uuid,
                criteria_id=current.criteria_id,
                valid=current.valid,
                extra_info=current.extra_info,
                created_at=current.created_at,
            )

            current.valid = valid
            current.extra_info = extra_info
            current.created_at = timezone.now()
            current.save(update_fields=['valid', 'extra_info', 'created_at'])
            logger.debug(f"Updated criteria {criteria_id} result for polygon {polygon_uuid}: valid={valid}")
            return current

    def current_for_polygon(self, polygon_uuid: str) -> List[CriteriaSite]:
        return list(CriteriaSite.objects.filter(polygon_uuid=polygon_uuid).order_by('-created_at', '-id'))

    def current_for_polygons(self, polygon_uuids: Iterable[str], criteria_id: Optional[int] = None) -> List[CriteriaSite]:
        queryset = CriteriaSite.objects.filter(polygon_uuid__in=list(polygon_uuids))
        if criteria_id is not None:
            queryset = queryset.filter(criteria_id=criteria_id)
        return list(queryset.order_by('-created_at', '-id'))

    def history_for_polygon(self, polygon_uuid: str, criteria_id: Optional[int] = None) -> List[CriteriaSiteHistoric]:
        queryset = CriteriaSiteHistoric.objects.filter(polygon_uuid=polygon_uuid)
        if criteria_id is not None:
            queryset = queryset.filter(criteria_id=criteria_id)
        return list(queryset.order_by('-superseded_at', '-id'))
