"""Routes for the unauthenticated booking form API."""

from __future__ import annotations

from django.urls import path  # type: ignore

from . import public_views

urlpatterns = [
    path("bookings/", public_views.PublicBookingCreateView.as_view(), name="public-booking-create"),
    path("bookings/<str:code>/", public_views.PublicBookingDetailView.as_view(), name="public-booking-detail"),
    path("packages/", public_views.PublicPackageListView.as_view(), name="public-package-list"),
    path("packages/<int:pk>/", public_views.PublicPackageDetailView.as_view(), name="public-package-detail"),
    path("hotels/", public_views.PublicHotelListView.as_view(), name="public-hotel-list"),
    path("activities/", public_views.PublicActivityListView.as_view(), name="public-activity-list"),
    path("activities/<int:pk>/", public_views.PublicActivityDetailView.as_view(), name="public-activity-detail"),
    path("about/", public_views.PublicAboutView.as_view(), name="public-about"),
    path("orders/query/", public_views.PublicOrderQueryView.as_view(), name="public-order-query"),
    path(
        "orders/<str:kind>/<int:pk>/",
        public_views.PublicOrderDetailView.as_view(),
        name="public-order-detail",
    ),
]
