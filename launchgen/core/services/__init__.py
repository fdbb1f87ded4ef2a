"""Services — pure logic over the project filesystem."""
