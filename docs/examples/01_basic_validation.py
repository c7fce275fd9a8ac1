"""
Example 1: Basic Record Validation

Build a schema with the fluent API, validate a record and report the errors.
"""

from mdc_validator import ValidationReporter, Validator


def main():
    """Demonstrate basic validation workflow."""
    print("=" * 80)
    print("Example 1: Basic Record Validation")
    print("=" * 80)
    print()

    # Step 1: Define a schema
    print("Step 1: Creating validation schema...")
    validator = (
        Validator()
        .field("username").string().required().min(3).max(50).pattern(r"^[a-zA-Z0-9]+$")
        .field("age").number().required().min(18).max(120)
        .field("role").string().is_in(["admin", "editor", "viewer"])
        .field("company").string().when_field("role", "admin", {"required": True})
        .field("birthday").date().past()
    )
    print(f"✓ Schema created with {len(validator)} fields")
    print()

    # Step 2: Validate a record
    print("Step 2: Validating record...")
    record = {
        "username": "jo",  # too short
        "age": 17,  # below minimum
        "role": "admin",  # makes company required
        "birthday": "2007-05-01",
    }
    result = validator.validate(record)

    print(f"Validation Result: {'✓ VALID' if result.is_valid else '✗ INVALID'}")
    for field, message in result.errors.items():
        print(f"  {field}: {message}")
    print()

    # Step 3: Generate reports
    print("Step 3: Generating validation reports...")
    reporter = ValidationReporter(result)
    reporter.to_console(verbose=True)
    reporter.to_json("validation_basic.json")
    reporter.to_html("validation_basic.html")
    print("✓ Reports exported: validation_basic.json, validation_basic.html")


if __name__ == "__main__":
    main()
