# Cart record service
