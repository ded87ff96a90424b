"""Logging sub-package; it holds no modules yet."""