"""
Shell script generator — render the hardened Bash skeleton.

Two template assets live here:

    SCRIPT_TEMPLATE   the generated script itself
    USAGE_TEMPLATE    the usage text the generated script prints for --help

Both are opaque text.  ``{{field}}`` markers are substituted in a single
pass and every other character is emitted verbatim, so the Bash syntax
inside the templates needs no escaping.  The generated script is never
executed here.
"""

from __future__ import annotations

import platform
import re
from datetime import datetime

from scriptgen.core.config.loader import GeneratorConfig
from scriptgen.core.models.request import GenerationRequest
from scriptgen.core.models.template import GeneratedScript

DEFAULT_DESCRIPTION = "Generated script template"
SCRIPT_VERSION = "1.0.0"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")

# Header comments are one line each; newlines and other control
# characters in free-text fields would break out of the comment.
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]+")


# ── Template assets ─────────────────────────────────────────────


USAGE_TEMPLATE = r"""Usage: $SCRIPT_NAME [OPTIONS]

Description:
    {{description}}

Options:
    -h, --help       Show this help message
    -v, --verbose    Enable verbose output
    -d, --dry-run    Show what would be done without executing
    --version        Show version information

Examples:
    $SCRIPT_NAME --help
    $SCRIPT_NAME --dry-run

"""


SCRIPT_TEMPLATE = r"""#!/bin/bash
#
# Script: {{script_name}}.sh
# Description: {{description}}
# Author: {{author}}
# Created: {{created}}
# Version: {{version}}
#
# Environment: {{platform}}
# Bash Version: ${BASH_VERSION}
#

# Safety settings - strict error handling
set -euo pipefail
IFS=$'\n\t'

# Script constants
readonly SCRIPT_DIR="$(cd "$(dirname "${BASH_SOURCE[0]}")" && pwd)"
readonly SCRIPT_NAME="$(basename "${BASH_SOURCE[0]}")"
readonly LOG_FILE="${SCRIPT_DIR}/${SCRIPT_NAME%.*}.log"
readonly REPOS_DIR="{{repos_dir}}"
readonly SCRIPTS_DIR="{{scripts_dir}}"
readonly LOCAL_BIN="{{local_bin}}"
readonly BASHRC_PATH="{{bashrc_path}}"

# Color codes for output
readonly RED='\033[0;31m'
readonly GREEN='\033[0;32m'
readonly YELLOW='\033[1;33m'
readonly BLUE='\033[0;34m'
readonly NC='\033[0m' # No Color

# Logging functions
log_message() {
    local level="$1"
    local message="$2"
    local timestamp
    timestamp=$(date +"%Y-%m-%d %H:%M:%S")
    echo "[${timestamp}] [${level}] ${message}" | tee -a "$LOG_FILE"
}

log_info() { log_message "INFO" "$1"; }
log_warning() { log_message "WARNING" "$1"; }
log_error() { log_message "ERROR" "$1"; }

# Error handling function
handle_error() {
    local line_number="$1"
    log_error "Script failed at line $line_number"
    cleanup
    exit 1
}

# Cleanup function
cleanup() {
    log_info "Performing cleanup..."
    # Add cleanup logic here
}

# Input validation function
validate_input() {
    local input="$1"
    local pattern="${2:-.*}"

    if [[ ! "$input" =~ $pattern ]]; then
        log_error "Invalid input: $input"
        return 1
    fi
    echo "$input"
}

# Safe file operations
create_backup() {
    local file="$1"
    if [[ -f "$file" ]]; then
        local backup_file
        backup_file="${file}.backup.$(date +%Y%m%d_%H%M%S)"
        if cp "$file" "$backup_file"; then
            log_info "Created backup: $backup_file"
        else
            log_error "Failed to create backup of $file"
            return 1
        fi
    fi
}

# Confirmation prompt function
confirm_action() {
    local prompt="$1"
    read -p "${prompt} (y/N): " -n 1 -r
    echo
    [[ $REPLY =~ ^[Yy]$ ]]
}

# Dry run function
dry_run_command() {
    if [[ "${DRY_RUN:-false}" == "true" ]]; then
        local cmd_str
        printf -v cmd_str '%q ' "$@"
        echo "DRY RUN: Would execute: $cmd_str" >&2
        return 0
    else
        "$@"
    fi
}

# Path validation with creation
validate_paths() {
    local paths=("$REPOS_DIR" "$SCRIPTS_DIR" "$LOCAL_BIN")

    for path in "${paths[@]}"; do
        if [[ ! -d "$path" ]]; then
            log_warning "Directory does not exist: $path"
            if confirm_action "Create directory $path?"; then
                if mkdir -p "$path"; then
                    log_info "Created directory: $path"
                else
                    log_error "Failed to create directory: $path"
                    return 1
                fi
            fi
        fi
    done
}

# Safe file permission check
get_file_permissions() {
    local file="$1"
    if [[ -f "$file" ]]; then
        stat -c "%A" "$file" 2>/dev/null || stat -f "%Sp" "$file"
    else
        echo "File not found"
    fi
}

# Main script usage
script_usage() {
    cat << 'USAGE_EOF'
{{usage}}USAGE_EOF
}

# Parameter parsing
parse_params() {
    local verbose=false

    while [[ $# -gt 0 ]]; do
        case $1 in
            -h|--help)
                script_usage
                exit 0
                ;;
            -v|--verbose)
                verbose=true
                set -x
                shift
                ;;
            -d|--dry-run)
                export DRY_RUN=true
                log_info "Dry run mode enabled"
                shift
                ;;
            --version)
                echo "$SCRIPT_NAME version {{version}}"
                exit 0
                ;;
            *)
                log_error "Unknown parameter: $1"
                script_usage
                exit 1
                ;;
        esac
    done

    if [[ "$verbose" == "true" ]]; then
        log_info "Verbose mode enabled"
    fi
}

# Main function
main() {
    # Set error handling
    trap 'handle_error $LINENO' ERR
    trap cleanup EXIT

    log_info "Starting $SCRIPT_NAME"

    # Validate environment paths
    validate_paths

    # Add your main script logic here
    log_info "Script logic goes here"

    # Example of using confirmation for dangerous operations
    if confirm_action "Perform potentially dangerous operation?"; then
        log_info "User confirmed dangerous operation"
        # dry_run_command rm -rf /some/important/file
    else
        log_info "User cancelled dangerous operation"
    fi

    log_info "Script completed successfully"
}

# Script entry point
if [[ "${BASH_SOURCE[0]}" == "${0}" ]]; then
    parse_params "$@"
    main "$@"
fi
"""


# ── Substitution ────────────────────────────────────────────────


def substitute(template: str, values: dict[str, str]) -> str:
    """Replace ``{{key}}`` markers with *values* in one pass.

    Inserted values are not scanned again, so a description that
    happens to contain ``{{author}}`` stays literal.

    Raises:
        KeyError: If the template names a field missing from *values*.
    """
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def comment_safe(text: str) -> str:
    """Collapse runs of control characters into single spaces."""
    return _CONTROL_CHARS.sub(" ", text)


def platform_string() -> str:
    """Kernel name and release, like ``uname -s -r``."""
    return f"{platform.system()} {platform.release()}".strip()


def template_values(
    request: GenerationRequest,
    config: GeneratorConfig,
    *,
    created: datetime,
    platform_info: str,
) -> dict[str, str]:
    """Build the substitution map for both template assets."""
    description = comment_safe(request.description) or DEFAULT_DESCRIPTION
    values = {
        "script_name": request.name,
        "description": description,
        "author": comment_safe(request.author),
        "created": created.strftime(TIMESTAMP_FORMAT),
        "version": SCRIPT_VERSION,
        "platform": platform_info,
        "repos_dir": str(config.repos_dir),
        "scripts_dir": str(config.scripts_dir),
        "local_bin": str(config.local_bin),
        "bashrc_path": str(config.bashrc_path),
    }
    values["usage"] = substitute(USAGE_TEMPLATE, values)
    return values


# ── Public API ──────────────────────────────────────────────────


def render_script(
    request: GenerationRequest,
    config: GeneratorConfig,
    *,
    created: datetime | None = None,
    platform_info: str | None = None,
) -> GeneratedScript:
    """Render the script skeleton for *request*.

    Args:
        request: Validated generation request.
        config: Resolved generator configuration.
        created: Timestamp for the header (default: now).
        platform_info: Environment line for the header
            (default: current ``uname -s -r`` equivalent).

    Returns:
        GeneratedScript addressed to the request's destination.
    """
    values = template_values(
        request,
        config,
        created=created or datetime.now(),
        platform_info=platform_string() if platform_info is None else platform_info,
    )
    content = substitute(SCRIPT_TEMPLATE, values)

    return GeneratedScript(
        path=str(request.destination(config)),
        content=content,
        reason=f"Generated Bash skeleton for {request.filename}",
    )
