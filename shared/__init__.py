"""
Shared Kernel

Cross-cutting pieces used by every app: the service error hierarchy and
DRF exception handler, the JSON envelope renderer, pagination, and the
phone/wechat validators.
"""
