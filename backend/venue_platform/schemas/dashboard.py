from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from venue_platform.schemas.appointment import VenueBookingCount
from venue_platform.schemas.blog import AuthorCount
from venue_platform.schemas.contact import MonthlyCount


class DashboardStats(BaseModel):
    total_users: int
    active_users: int
    total_venues: int
    total_blogs: int
    total_partners: int
    total_reviews: int
    pending_contacts: int
    pending_appointments: int


class StatusMonthlyCount(MonthlyCount):
    status: str


class EntityReviewSummary(BaseModel):
    entity_type: str
    count: int
    average_rating: float


class DashboardAnalytics(BaseModel):
    user_registration_trends: list[MonthlyCount]
    blog_publishing_trends: list[MonthlyCount]
    appointment_trends: list[StatusMonthlyCount]
    review_analytics: list[EntityReviewSummary]
    top_venues_by_appointments: list[VenueBookingCount]
    top_blog_authors: list[AuthorCount]


class RecentUser(BaseModel):
    id: int
    full_name: str
    email: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RecentBlog(BaseModel):
    id: int
    title: str
    author_name: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class RecentAppointment(BaseModel):
    id: int
    user_name: str
    venue_name: str
    appointment_date: datetime
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RecentContact(BaseModel):
    id: int
    name: str
    subject: str
    is_resolved: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class RecentReview(BaseModel):
    id: int
    user_name: str
    entity_type: str
    rating: int
    comment: str
    created_at: datetime

    model_config = {"from_attributes": True}


class DashboardActivities(BaseModel):
    recent_users: list[RecentUser]
    recent_blogs: list[RecentBlog]
    recent_appointments: list[RecentAppointment]
    recent_contacts: list[RecentContact]
    recent_reviews: list[RecentReview]


class SystemHealth(BaseModel):
    server: dict
    database: dict
    cache: dict
    sweeper: dict
    api: dict
    timestamp: datetime
