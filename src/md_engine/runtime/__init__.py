"""Runtime services: settings, telemetry, and polled timers."""
