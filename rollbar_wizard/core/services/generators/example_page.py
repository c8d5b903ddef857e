"""
Example scaffold generators.

The example page renders buttons that raise a client error, send an info
message and call the example API route, which throws on the server.  Both
router flavours are supported; relative imports climb from the file's
depth inside the router directory back to the project root.
"""

from __future__ import annotations

from rollbar_wizard.core.services.generators.common import up_to_root

EXAMPLE_PAGE_SLUG = "rollbar-example-page"
EXAMPLE_API_SLUG = "rollbar-example-api"


def _error_class(name: str, typescript: bool) -> str:
    param = "message: string | undefined" if typescript else "message"
    return (
        f"class {name} extends Error {{\n"
        f"  constructor({param}) {{\n"
        "    super(message);\n"
        f"    this.name = '{name}';\n"
        "  }\n"
        "}\n"
    )


def _button_style(background: str, margin_right: bool = False) -> str:
    extra = "            marginRight: '1rem',\n" if margin_right else ""
    return (
        "          style={{ \n"
        "            padding: '0.5rem 1rem',\n"
        f"{extra}"
        f"            background: '{background}',\n"
        "            color: 'white',\n"
        "            border: 'none',\n"
        "            borderRadius: '4px',\n"
        "            cursor: 'pointer'\n"
        "          }}\n"
    )


def example_page_contents(
    typescript: bool,
    app_location: tuple[str, ...] | None = None,
    pages_location: tuple[str, ...] | None = None,
) -> str:
    """Example page for the app router (``use client``) or the pages router."""
    if app_location is not None:
        # app/<slug>/page.tsx sits one level below the router directory
        base = up_to_root(len(app_location) + 1)
        use_client = True
    elif pages_location is not None:
        base = up_to_root(len(pages_location))
        use_client = False
    else:
        base = up_to_root(2)
        use_client = True

    state_type = "<string | null>" if typescript else ""
    header = '"use client";\n\n' if use_client else ""

    return (
        f"{header}"
        "import { useState } from 'react';\n"
        "import { Provider, ErrorBoundary, useRollbar } from '@rollbar/react';\n"
        f"import rollbar from '{base}/rollbar.client.config';\n"
        "\n"
        f"{_error_class('RollbarExampleError', typescript)}"
        "\n"
        "function ErrorButton() {\n"
        "  const rollbar = useRollbar();\n"
        f"  const [serverErrorStatus, setServerErrorStatus] = useState{state_type}(null);\n"
        "\n"
        "  const triggerError = () => {\n"
        "    throw new RollbarExampleError('This is a test error from the Rollbar Next.js integration');\n"
        "  };\n"
        "\n"
        "  const sendInfo = () => {\n"
        "    rollbar.info('Test info message from Rollbar Next.js integration');\n"
        "  };\n"
        "\n"
        "  const triggerServerError = async () => {\n"
        "    setServerErrorStatus('Sending...');\n"
        "    try {\n"
        f"      const response = await fetch('/api/{EXAMPLE_API_SLUG}');\n"
        "      if (!response.ok) {\n"
        "        setServerErrorStatus('Error sent! Check your Rollbar dashboard.');\n"
        "      }\n"
        "    } catch (error) {\n"
        "      // Expected: the route throws and reports to Rollbar\n"
        "      setServerErrorStatus('Error sent! Check your Rollbar dashboard.');\n"
        "    }\n"
        "  };\n"
        "\n"
        "  return (\n"
        "    <div style={{ padding: '2rem', fontFamily: 'sans-serif' }}>\n"
        "      <h1>Rollbar Test Page</h1>\n"
        "      <p>Use these buttons to test your Rollbar integration:</p>\n"
        "\n"
        "      <div style={{ marginTop: '1rem' }}>\n"
        "        <h2 style={{ fontSize: '1.2rem', marginTop: '1.5rem', marginBottom: '0.5rem' }}>"
        "Client-Side Testing</h2>\n"
        "        <button\n"
        "          onClick={triggerError}\n"
        f"{_button_style('#dc3545', margin_right=True)}"
        "        >\n"
        "          Trigger Client Error\n"
        "        </button>\n"
        "\n"
        "        <button\n"
        "          onClick={sendInfo}\n"
        f"{_button_style('#28a745')}"
        "        >\n"
        "          Send Info Message\n"
        "        </button>\n"
        "      </div>\n"
        "\n"
        "      <div style={{ marginTop: '1rem' }}>\n"
        "        <h2 style={{ fontSize: '1.2rem', marginTop: '1.5rem', marginBottom: '0.5rem' }}>"
        "Server-Side Testing</h2>\n"
        "        <button\n"
        "          onClick={triggerServerError}\n"
        "          disabled={serverErrorStatus !== null}\n"
        "          style={{ \n"
        "            padding: '0.5rem 1rem',\n"
        "            background: '#ff6b35',\n"
        "            color: 'white',\n"
        "            border: 'none',\n"
        "            borderRadius: '4px',\n"
        "            cursor: serverErrorStatus ? 'not-allowed' : 'pointer',\n"
        "            opacity: serverErrorStatus ? 0.6 : 1\n"
        "          }}\n"
        "        >\n"
        "          Trigger Server Error\n"
        "        </button>\n"
        "        {serverErrorStatus && (\n"
        "          <span style={{ marginLeft: '1rem', color: '#28a745' }}>\n"
        "            {serverErrorStatus}\n"
        "          </span>\n"
        "        )}\n"
        "      </div>\n"
        "\n"
        "      <p style={{ marginTop: '2rem', fontSize: '0.9rem', color: '#666' }}>\n"
        "        After clicking these buttons, check your Rollbar dashboard to see the events.\n"
        "      </p>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
        "\n"
        "export default function Page() {\n"
        "  return (\n"
        "    <Provider instance={rollbar}>\n"
        "      <ErrorBoundary>\n"
        "        <ErrorButton />\n"
        "      </ErrorBoundary>\n"
        "    </Provider>\n"
        "  );\n"
        "}\n"
    )


def app_api_route_contents(typescript: bool, app_location: tuple[str, ...]) -> str:
    # app/api/<slug>/route.ts
    base = up_to_root(len(app_location) + 2)
    return (
        "import { NextResponse } from 'next/server';\n"
        f"import rollbar from '{base}/rollbar.server.config';\n"
        "\n"
        "export const dynamic = 'force-dynamic';\n"
        "\n"
        f"{_error_class('RollbarExampleAPIError', typescript)}"
        "\n"
        "// A faulty API route to test Rollbar's server-side error monitoring\n"
        "export function GET() {\n"
        "  const error = new RollbarExampleAPIError("
        "'This is a test error from the server-side Rollbar Next.js integration');\n"
        "  rollbar.error('Server-side test error', error);\n"
        "  throw error;\n"
        "}\n"
    )


def pages_api_route_contents(typescript: bool, pages_location: tuple[str, ...]) -> str:
    # pages/api/<slug>.ts
    base = up_to_root(len(pages_location) + 1)
    return (
        f"import rollbar from '{base}/rollbar.server.config';\n"
        "\n"
        f"{_error_class('RollbarExampleAPIError', typescript)}"
        "\n"
        "// A faulty API route to test Rollbar's server-side error monitoring\n"
        "export default function handler(_req, res) {\n"
        "  const error = new RollbarExampleAPIError("
        "'This is a test error from the server-side Rollbar Next.js integration');\n"
        "  rollbar.error('Server-side test error', error);\n"
        "  throw error;\n"
        "}\n"
    )


def root_layout_contents(typescript: bool) -> str:
    children_type = ": {\n  children: React.ReactNode\n}" if typescript else ""
    return (
        "export const metadata = {\n"
        "  title: 'Rollbar NextJS Example',\n"
        "  description: 'Generated by Rollbar Wizard',\n"
        "}\n"
        "\n"
        "export default function RootLayout({\n"
        "  children,\n"
        f"}}{children_type}) {{\n"
        "  return (\n"
        '    <html lang="en">\n'
        "      <body>{children}</body>\n"
        "    </html>\n"
        "  )\n"
        "}\n"
    )
