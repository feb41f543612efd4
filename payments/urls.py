from django.urls import path
from . import views
app_name = "payments"
urlpatterns = [
    path("", views.index_view, name="index"),
    path("initiatejuspaypayment", views.initiate_payment_view, name="initiate_payment"),
    # camelCase alias kept for older clients
    path("initiateJuspayPayment", views.initiate_payment_view, name="initiate_payment_alias"),
    path("handleJuspayResponse", views.handle_response_view, name="handle_response"),  # also the return_url
]
