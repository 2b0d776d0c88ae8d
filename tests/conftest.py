import os

os.environ.setdefault("FLEETOPS_JWT_SECRET", "test-secret-that-is-at-least-32-characters")
os.environ.setdefault("FLEETOPS_AMAP_KEY", "")
