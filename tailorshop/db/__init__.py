# Database access
