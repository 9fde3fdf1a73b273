from typing import List

from marketadmin.schemas.audit import AuditLogRead
from marketadmin.schemas.feedback import FeedbackRead
from marketadmin.schemas.listing import ListingRead, ListingWithSeller
from marketadmin.schemas.report import ReportRead, ReportWithParties
from marketadmin.schemas.user import ProfileRead


class UserDetail(ProfileRead):
    listings: List[ListingRead] = []
    reports_against: List[ReportRead] = []
    reports_filed: List[ReportRead] = []
    feedback: List[FeedbackRead] = []
    audit_log: List[AuditLogRead] = []


class ListingDetail(ListingWithSeller):
    reports: List[ReportRead] = []
    audit_log: List[AuditLogRead] = []


class ReportDetail(ReportWithParties):
    action_history: List[AuditLogRead] = []
