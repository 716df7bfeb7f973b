from storefront.models.segment import Segment
from storefront.models.quote import Quote
from storefront.models.audit_log import AuditLog

__all__ = ["Segment", "Quote", "AuditLog"]
