"""
Devices API Root Module

This module serves as the root for the source code of the Devices API.

Layer Structure:
- Domain: Device entity, state enumeration, errors and repository contract
- Application: Device service, mapper and DTOs
- Infrastructure: MongoDB persistence and health checks
- Presentation: Controllers, routes and error responses for the REST API
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
