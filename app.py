import gradio as gr

from json_schema_resolver.flattening import ROW_FIELDS
from json_schema_resolver.handlers import (
    HTTP_METHODS,
    curl_handler,
    load_schema_handler,
    parse_schema_text_handler,
    resolve_schema_handler,
)
from json_schema_resolver.logging_utils import setup_logging

setup_logging()

# --- UI Definition ---
with gr.Blocks(title="JSON Schema Resolver") as demo:
    gr.Markdown("# JSON Schema Resolver")
    gr.Markdown("Load a JSON schema to browse its flattened object definition, an example instance, and a matching cURL call.")

    # State
    schema_state = gr.State()

    with gr.Tab("Definition"):
        with gr.Row():
            # Left Panel: Input
            with gr.Column(scale=1):
                gr.Markdown("### 1. Import")
                file_input = gr.File(label="Upload Schema", file_types=[".json"])
                schema_text = gr.Code(label="Schema", language="json", interactive=True)
                parse_btn = gr.Button("Use Pasted Schema")
                status_msg = gr.Textbox(label="Status", interactive=False)

            # Right Panel: Output
            with gr.Column(scale=1):
                gr.Markdown("### 2. Example")
                example_output = gr.Code(label="Example", language="json", interactive=False)

                gr.Markdown("### 3. Properties")
                properties_table = gr.Dataframe(
                    headers=list(ROW_FIELDS),
                    datatype=["str", "str", "bool", "str", "str"],
                    interactive=False,
                    label="Properties",
                )

                gr.Markdown("### 4. Definition")
                definition_output = gr.JSON(label="Object Definition")

        resolve_outputs = [definition_output, example_output, properties_table, status_msg]

        file_input.upload(
            fn=load_schema_handler,
            inputs=[file_input],
            outputs=[schema_state, status_msg, schema_text],
        ).then(
            fn=resolve_schema_handler,
            inputs=[schema_state],
            outputs=resolve_outputs,
        )

        parse_btn.click(
            fn=parse_schema_text_handler,
            inputs=[schema_text],
            outputs=[schema_state, status_msg],
        ).then(
            fn=resolve_schema_handler,
            inputs=[schema_state],
            outputs=resolve_outputs,
        )

    with gr.Tab("cURL"):
        gr.Markdown("The example of the loaded schema is sent as the payload (as a query string for GET).")
        with gr.Row():
            with gr.Column():
                uri_input = gr.Textbox(label="Request URI", placeholder="https://api.example.com/v1/items")
                method_input = gr.Dropdown(label="Method", choices=HTTP_METHODS, value="POST", interactive=True)
                headers_input = gr.Code(
                    label="Headers (JSON object)",
                    language="json",
                    value='{"Content-Type": "application/json"}',
                    interactive=True,
                )
                curl_btn = gr.Button("Generate", variant="primary")
            with gr.Column():
                curl_output = gr.Code(label="cURL", language="shell", interactive=False)
                curl_status = gr.Textbox(label="Status", interactive=False)

        curl_btn.click(
            fn=curl_handler,
            inputs=[schema_state, uri_input, method_input, headers_input],
            outputs=[curl_output, curl_status],
        )

if __name__ == "__main__":
    demo.launch()
