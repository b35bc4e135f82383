"""Chapter attendance service: attendance tokens, check-in and attendance records."""
