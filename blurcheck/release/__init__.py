# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release identity and workspace handling.

Turns the operator's version/candidate input into a tag, a staging URL and
the on-disk layout every verification check reads from.
"""
