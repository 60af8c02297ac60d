"""
Booking URLs.

  /bookings/api/slots/                     GET   free slots for a barbershop+day
  /bookings/api/bookings/                  POST  submit a booking
  /bookings/api/bookings/<uuid>/cancel/    POST  cancel own booking
  /bookings/my/                            GET   signed-in customer's bookings
"""
from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    path('api/slots/',                               views.api_slots,          name='api_slots'),
    path('api/bookings/',                            views.api_submit_booking, name='api_submit'),
    path('api/bookings/<uuid:booking_id>/cancel/',   views.api_cancel_booking, name='api_cancel'),
    path('my/',                                      views.my_bookings,        name='my_bookings'),
]
