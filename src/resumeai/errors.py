# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception types raised by ResumeAI.
"""


class ResumeAIError(Exception):
    """Base class for all ResumeAI errors."""


class GenerationError(ResumeAIError):
    """A generation call failed; nothing from it may be applied."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


class TransportError(GenerationError):
    """The model provider could not be reached or returned an error."""


class SchemaViolationError(GenerationError):
    """The model response did not match the declared shape."""


class InvalidRequestError(ResumeAIError):
    """A generation was requested without its required inputs."""


class IngestError(ResumeAIError):
    """A job description could not be read."""
