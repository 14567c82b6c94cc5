# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
blurcheck: Apache Blur (incubating) release candidate validator.

One command reproduces the release-audit checklist: fetch the staged
artifacts, verify digests and signatures, rebuild from the release tag and
diff the source archive, then check LICENSE and NOTICE compliance.
"""

__version__ = "0.3.0"
