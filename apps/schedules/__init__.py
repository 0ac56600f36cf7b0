"""Activity timeline: coaches and the per-day schedule of projects."""
