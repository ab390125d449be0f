"""
QuakeCast Root Module

Earthquake nowcasting: ETAS-style intensity kernel combined with a
calibrated logistic-regression classifier.

Layer Structure:
- Domain: Entities, numeric services (kernel, grid, features, classifier,
  calibration, evaluation, aftershock ring) and port interfaces
- Application: Use cases (training pipeline, prediction, aftershock) and DTOs
- Infrastructure: USGS catalog gateway, artifact storage, rate limiting, caching
- Presentation: FastAPI controllers
- Shared: Cross-cutting concerns (logging, enums)
- Main: Composition root, configuration and entry points
"""
