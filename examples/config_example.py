"""
Configuration Examples for the Request Client
Demonstrates various ways to configure and use a client
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from request_client import (
    ConfigLoader,
    ConfigValidator,
    MediaType,
    RequestClient,
)


class Args(BaseModel):
    test: Optional[str] = None


class EchoResult(BaseModel):
    """Subset of a postman-echo response"""
    args: Optional[Args] = None
    echoed: Optional[dict] = Field(default=None, alias="json")
    url: Optional[str] = None


# =============================================================================
# Example 1: Fluent Configuration
# =============================================================================

def fluent_example() -> None:
    """Configure a client in one chain and call every verb"""
    client = (
        RequestClient.set_base_uri("https://postman-echo.com")
        .set_media_type(MediaType.JSON)
        .set_encoding("utf-8")
        .set_timeout(30000)
        .add_header("X-Request-Source", "examples")
    )

    with client:
        result = client.get("get?test=test", EchoResult)
        print(f"GET    {int(result.status_code)} args={result.result.args if result.result else None}")

        result = client.post("post", {"test": "test"}, EchoResult)
        print(f"POST   {int(result.status_code)} json={result.result.echoed if result.result else None}")

        result = client.put("put", {"test": "test"})
        print(f"PUT    {int(result.status_code)} raw={result.result[:40] if result.result else ''}")

        result = client.delete("delete")
        print(f"DELETE {int(result.status_code)}")


# =============================================================================
# Example 2: File, Environment and Programmatic Configuration
# =============================================================================

def merged_config_example() -> RequestClient:
    """
    Merge configuration from multiple sources
    Priority: programmatic > environment > file

    Environment variables use the REQUEST_CLIENT_ prefix, e.g.

    export REQUEST_CLIENT_BASE_URI="https://postman-echo.com/"
    export REQUEST_CLIENT_MEDIA_TYPE="xml"
    export REQUEST_CLIENT_TIMEOUT="60000"
    """
    loader = ConfigLoader()

    settings = loader.load(
        file="./config/request_client.json",
        env=True,
        config={
            # Override specific settings at runtime
            "timeout": 60000,
        },
    )

    return RequestClient.from_settings(settings)


# =============================================================================
# Example 3: Failures Are Results
# =============================================================================

def failure_example() -> None:
    """Network problems come back as a status and detail, never as exceptions"""
    with RequestClient.set_base_uri("http://127.0.0.1:9").set_timeout(2000) as client:
        result = client.get("get")

        print(f"status={int(result.status_code)} detail={result.exception_detail!r}")
        print(f"exception={result.exception!r}")


# =============================================================================
# Example 4: Creating a Configuration Template
# =============================================================================

def create_config_template_example() -> None:
    """Create a template configuration file"""
    loader = ConfigLoader()

    loader.create_template("./config/request_client.template.json")

    print("Configuration template created at ./config/request_client.template.json")


# =============================================================================
# Example 5: Configuration Validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    partial_config = {
        "base_uri": "postman-echo.com",
        "timeout": 0,
    }

    result = validator.validate(partial_config)

    if not result.valid:
        print("Configuration validation failed:")
        for error in result.errors:
            print(f"  - {error.field}: {error.message}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    print("=== Request Client Examples ===\n")

    print("5. Configuration Validation:")
    validation_example()
    print()

    print("4. Create Configuration Template:")
    create_config_template_example()
    print()

    print("3. Failures Are Results:")
    failure_example()
    print()

    print("1. Fluent Configuration:")
    fluent_example()
