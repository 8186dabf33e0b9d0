"""
diststage Test Suite
====================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → Tests for diststage.core (config, models, exceptions)
    ├── test_orchestration/ → Tests for diststage.orchestration (classifier, stager, workflows)
    ├── test_infrastructure/→ Tests for diststage.infrastructure (path ops, site archiver)
    ├── test_integrations/  → Tests for diststage.integrations (SCM providers, templates)
    ├── test_integration/   → End-to-end runs through the facade
    └── conftest.py         → Shared pytest fixtures

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_core/         # Run only core tests
    pytest --cov=diststage          # Run with coverage report
"""
