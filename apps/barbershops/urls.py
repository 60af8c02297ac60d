from django.urls import path
from . import views

app_name = 'barbershops'

urlpatterns = [
    path('',                          views.barbershop_list,   name='list'),
    path('<uuid:barbershop_id>/',     views.barbershop_detail, name='detail'),
]
