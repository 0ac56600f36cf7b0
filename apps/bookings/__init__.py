"""Bookings app package.

Reservation requests collected from the public WeChat form or entered by
operators. A booking carries a snapshot of the customer, hotel and package
it was made with, and is converted into an order once staff confirm it.
"""
