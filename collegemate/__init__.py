"""CollegeMate - college portal core: OTP-gated auth and the daily bunk poll"""

__version__ = "1.0.0"
