"""
Error page generators — pages-router ``_error`` and app-router ``global-error``.
"""

from __future__ import annotations

from rollbar_wizard.core.services.generators.common import up_to_root


def underscore_error_page_contents(pages_location: tuple[str, ...]) -> str:
    base = up_to_root(len(pages_location))
    return (
        f"import rollbar from '{base}/rollbar.server.config';\n"
        "import Error from 'next/error';\n"
        "\n"
        "const CustomErrorComponent = (props) => {\n"
        "  return <Error statusCode={props.statusCode} />;\n"
        "};\n"
        "\n"
        "CustomErrorComponent.getInitialProps = async (contextData) => {\n"
        "  // Report the error before the serverless function exits\n"
        "  rollbar.error('Next.js error page', contextData.err, {\n"
        "    request: contextData.req,\n"
        "    response: contextData.res,\n"
        "  });\n"
        "\n"
        "  return Error.getInitialProps(contextData);\n"
        "};\n"
        "\n"
        "export default CustomErrorComponent;\n"
    )


def global_error_page_contents(typescript: bool, app_location: tuple[str, ...]) -> str:
    base = up_to_root(len(app_location))
    props = "{ error }: { error: Error & { digest?: string } }" if typescript else "{ error }"
    return (
        '"use client";\n'
        "\n"
        f"import rollbar from '{base}/rollbar.client.config';\n"
        "import NextError from 'next/error';\n"
        "import { useEffect } from 'react';\n"
        "\n"
        f"export default function GlobalError({props}) {{\n"
        "  useEffect(() => {\n"
        "    rollbar.error('Global error', error);\n"
        "  }, [error]);\n"
        "\n"
        "  return (\n"
        "    <html>\n"
        "      <body>\n"
        "        <NextError statusCode={0} />\n"
        "      </body>\n"
        "    </html>\n"
        "  );\n"
        "}\n"
    )
