"""Korean real-estate statistics backend: synthetic series and investment math."""
