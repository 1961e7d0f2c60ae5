# persistence/urls.py

from django.urls import path

from persistence.views.customer import CustomerDataView

app_name = "persistence"

urlpatterns = [
    path("", CustomerDataView.as_view(), name="customer-data"),
]
