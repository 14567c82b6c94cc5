# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Verification checks for a staged release.

Every check is independent: it takes explicit paths and collaborators and
returns CheckResult values. Nothing here prints; rendering lives in
blurcheck.report.
"""
