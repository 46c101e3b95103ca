"""
Citizen Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("platform", views.platform_info_view),
    path("platform/init", views.platform_init_view),
    path("issuers", views.issuers_list_view),
    path("issuers/add", views.issuers_add_view),
    path("issuers/check", views.issuers_check_view),
    path("issuers/<str:issuer>/credentials", views.issuer_credentials_view),
    path("credentials/issue", views.credentials_issue_view),
    path("credentials/<str:asset_id>", views.credential_detail_view),
    path("students/<str:wallet>/credentials", views.student_credentials_view),
    path("properties", views.properties_list_view),
    path("properties/register", views.properties_register_view),
    path("properties/buy", views.properties_buy_view),
    path("properties/claim-yield", views.properties_claim_yield_view),
    path("properties/<str:asset_id>", views.property_detail_view),
    path("properties/<str:asset_id>/buyers", views.property_buyers_view),
    path("wallets/<str:wallet>/holdings", views.wallet_holdings_view),
    path("wallets/<str:wallet>/dashboard", views.wallet_dashboard_view),
]
