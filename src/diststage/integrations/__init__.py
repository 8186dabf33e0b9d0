"""
diststage.integrations - External Collaborator Layer
======================================================

Adapters for the collaborators the staging core depends on. Each is
abstracted behind an interface so implementations can be swapped
(e.g. svn → mock in tests).

Sub-packages / modules:
    scm/        - Source control providers (svn command line, mock)
    templates/  - HEADER/README page renderer
    archive     - Archive writers (zip)
"""

__all__: list[str] = []
